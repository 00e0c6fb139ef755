import json

import httpx
import pytest

from recipe_assist.app.api.deps import get_services
from recipe_assist.app.core.config import Settings
from recipe_assist.app.core.container import ServiceContainer


def chat_payload(**overrides):
    payload = {"messages": [{"role": "user", "content": "What should I cook tonight?"}], "persona": "homeCook"}
    payload.update(overrides)
    return payload


def test_chat_returns_message_and_usage(client, auth_headers, fake_openai):
    fake_openai.reply("How about a frittata?")
    response = client.post(
        "/ai/chat",
        json=chat_payload(liveSelections={"moods": ["cozy"]}),
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "How about a frittata?"
    assert body["usage"]["total_tokens"] == 15
    assert "thread_id" not in body
    system_prompt = json.loads(fake_openai.requests[0].content)["messages"][0]["content"]
    assert "Moods: cozy" in system_prompt


def test_chat_unknown_persona(client, auth_headers):
    response = client.post("/ai/chat", json=chat_payload(persona="pirate"), headers=auth_headers)
    assert response.status_code == 400


def test_chat_requires_messages(client, auth_headers):
    response = client.post("/ai/chat", json=chat_payload(messages=[]), headers=auth_headers)
    assert response.status_code == 422


def test_chat_rate_limit_passes_through(client, auth_headers, fake_openai):
    for _ in range(3):
        fake_openai.queue(429, json={"error": {"message": "slow down"}})
    response = client.post("/ai/chat", json=chat_payload(), headers=auth_headers)
    assert response.status_code == 429


def test_chat_provider_error_is_bad_gateway(client, auth_headers, fake_openai):
    fake_openai.queue(400, json={"error": {"message": "bad request"}})
    response = client.post("/ai/chat", json=chat_payload(), headers=auth_headers)
    assert response.status_code == 502


def test_chat_without_api_key(app, client, auth_headers):
    settings = Settings(OPENAI_API_KEY=None, _env_file=None)
    unconfigured = ServiceContainer(settings, httpx.AsyncClient())
    app.dependency_overrides[get_services] = lambda: unconfigured
    response = client.post("/ai/chat", json=chat_payload(), headers=auth_headers)
    assert response.status_code == 503


def test_structured_recipe(client, auth_headers, fake_openai):
    fake_openai.reply(json.dumps({"title": "Frittata", "ingredients": ["6 large eggs"], "instructions": "Whisk and bake."}))
    response = client.post(
        "/ai/recipe",
        json={"messages": [{"role": "user", "content": "Make it a frittata"}]},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["recipe"]["title"] == "Frittata"
    assert body["recipe"]["ingredients"] == ["eggs"]


def test_list_personas(client):
    response = client.get("/ai/personas")
    assert response.status_code == 200
    keys = {p["key"]: p for p in response.json()}
    assert set(keys) == {"chef", "nutritionist", "homeCook", "assistantNutritionist"}
    assert keys["assistantNutritionist"]["assistant_powered"] is False


@pytest.mark.parametrize("path", ["/ai/chat", "/ai/recipe"])
def test_ai_routes_require_auth(client, path):
    response = client.post(path, json=chat_payload())
    assert response.status_code in {401, 403}
