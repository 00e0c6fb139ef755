import json

import pytest
from fastapi.exceptions import RequestValidationError

from recipe_assist.app.main import validation_exception_handler


@pytest.mark.asyncio
async def test_validation_handler_formats_errors():
    exc = RequestValidationError(
        errors=[
            {"loc": ("body", "content"), "msg": "field required"},
            {"loc": ("body", "messages", 0, "role"), "msg": "Input should be 'user', 'assistant' or 'system'"},
        ]
    )
    response = await validation_exception_handler(None, exc)
    assert response.status_code == 422
    body = json.loads(response.body)
    assert body["error_code"] == "validation_error"
    assert body["message"] == "Invalid request payload."
    assert {"field": "body.content", "message": "field required"} in body["details"]
    assert {"field": "body.messages.0.role", "message": "Input should be 'user', 'assistant' or 'system'"} in body["details"]


def test_invalid_parse_request_uses_handler(client, auth_headers):
    response = client.post("/recipes/parse", json={"content": ""}, headers=auth_headers)
    assert response.status_code == 422
    assert response.json()["error_code"] == "validation_error"
