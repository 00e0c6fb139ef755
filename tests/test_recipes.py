import json

from recipe_assist.app.schemas.recipe import RecipeCreate
from recipe_assist.app.services import recipes_service


def recipe_payload():
    return {
        "title": "Test Recipe",
        "description": "Tasty",
        "ingredients": ["flour", "eggs"],
        "instructions": "Mix\nBake",
        "categories": ["Course: Dessert"],
        "setup": ["Prep time: 10 minutes"],
    }


def test_create_recipe_and_scoping(client, db_session, auth_headers):
    response = client.post("/recipes", json=recipe_payload(), headers=auth_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["user_id"] == "1"
    assert body["title"] == "Test Recipe"
    assert body["ingredients"] == ["flour", "eggs"]
    assert body["notes"] == ""

    other_payload = recipe_payload()
    other_payload["title"] = "Other User Recipe"
    recipes_service.create_recipe(db_session, 2, RecipeCreate(**other_payload))

    list_response = client.get("/recipes", headers=auth_headers)
    assert list_response.status_code == 200
    titles = {r["title"] for r in list_response.json()}
    assert "Test Recipe" in titles
    assert "Other User Recipe" not in titles


def test_create_requires_ingredients_and_instructions(client, auth_headers):
    bad_payload = recipe_payload()
    bad_payload["ingredients"] = ["  "]
    response = client.post("/recipes", json=bad_payload, headers=auth_headers)
    assert response.status_code == 422

    bad_payload = recipe_payload()
    bad_payload["instructions"] = ""
    response = client.post("/recipes", json=bad_payload, headers=auth_headers)
    assert response.status_code == 422


def test_get_update_delete(client, auth_headers, other_user_token):
    recipe_id = client.post("/recipes", json=recipe_payload(), headers=auth_headers).json()["id"]

    other_headers = {"Authorization": f"Bearer {other_user_token}"}
    assert client.get(f"/recipes/{recipe_id}", headers=other_headers).status_code == 404

    response = client.patch(f"/recipes/{recipe_id}", json={"title": "Renamed", "notes": "Serve warm"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"
    assert response.json()["notes"] == "Serve warm"
    assert response.json()["ingredients"] == ["flour", "eggs"]

    assert client.delete(f"/recipes/{recipe_id}", headers=auth_headers).status_code == 204
    assert client.get(f"/recipes/{recipe_id}", headers=auth_headers).status_code == 404


def test_parse_pattern_fallback_without_ai(client, auth_headers, fake_openai):
    content = "Ingredients:\n- 2 cups flour\n- 1 egg\nInstructions:\n1. Mix\n2. Bake"
    response = client.post("/recipes/parse", json={"content": content, "use_ai": False}, headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["parser_strategy"] == "pattern_fallback"
    assert body["recipe"]["ingredients"] == ["2 cups flour", "1 egg"]
    assert body["created_recipe_id"] is None
    assert fake_openai.requests == []


def test_parse_structured_and_save(client, auth_headers):
    content = '```json\n{"title": "Soup", "ingredients": ["1 cup broth"], "instructions": "Heat it."}\n```'
    response = client.post("/recipes/parse", json={"content": content, "save": True}, headers=auth_headers)
    body = response.json()
    assert body["success"] is True
    assert body["parser_strategy"] == "structured_json"
    assert body["warnings"] == []

    saved = client.get(f"/recipes/{body['created_recipe_id']}", headers=auth_headers).json()
    assert saved["title"] == "Soup"
    assert saved["ingredients"] == ["broth"]
    assert saved["parser_strategy"] == "structured_json"


def test_parse_uses_ai_for_conversational_text(client, auth_headers, fake_openai):
    fake_openai.reply(json.dumps({"title": "Garlic Rice", "ingredients": ["1 cup rice", "2 cloves garlic"], "instructions": ["Cook rice", "Add garlic"]}))
    response = client.post(
        "/recipes/parse",
        json={"content": "I usually cook a cup of rice and add some garlic at the end."},
        headers=auth_headers,
    )
    body = response.json()
    assert body["parser_strategy"] == "ai_text"
    assert body["recipe"]["ingredients"] == ["rice", "garlic"]
    assert len(fake_openai.requests) == 1


def test_parse_failure(client, auth_headers):
    response = client.post("/recipes/parse", json={"content": "hello world"}, headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "unparseable_text"
    assert body["message"].startswith("Unable to parse recipe")


def test_parse_blank_title_is_rejected_not_saved(client, auth_headers):
    content = json.dumps({"title": "  ", "ingredients": ["1 cup broth"], "instructions": "Heat it."})
    response = client.post(
        "/recipes/parse",
        json={"content": content, "save": True, "use_ai": False},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["created_recipe_id"] is None
    assert client.get("/recipes", headers=auth_headers).json() == []


def test_standardize_recipe_text(client, auth_headers, fake_openai):
    fake_openai.reply("# Omelette\n\n## Ingredients\n- 2 eggs\n\n## Instructions\n1. Whisk and cook")
    response = client.post("/recipes/standardize", json={"recipeText": "omelette w/ 2 eggs"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "standardized_text": "# Omelette\n\n## Ingredients\n- 2 eggs\n\n## Instructions\n1. Whisk and cook",
    }


def test_standardize_provider_failure(client, auth_headers, fake_openai):
    fake_openai.queue(400, json={"error": {"message": "bad"}})
    response = client.post("/recipes/standardize", json={"recipe_text": "omelette"}, headers=auth_headers)
    assert response.status_code == 502


def test_standardize_requires_text(client, auth_headers):
    response = client.post("/recipes/standardize", json={"recipeText": ""}, headers=auth_headers)
    assert response.status_code == 422
