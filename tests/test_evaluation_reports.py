from recipe_assist.app.schemas.recipe import RecipeCreate
from recipe_assist.app.services import recipes_service


def _recipe(db_session, user_id=1):
    return recipes_service.create_recipe(
        db_session,
        user_id,
        RecipeCreate(title="Oatmeal", ingredients=["oats", "milk"], instructions="Simmer oats in milk."),
    )


def test_create_and_list_report(client, db_session, auth_headers, fake_openai):
    recipe = _recipe(db_session)
    fake_openai.reply("Balanced breakfast, around 300 kcal.")

    response = client.post("/evaluation-reports", json={"recipe_id": recipe.id}, headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["recipe_id"] == recipe.id
    assert body["persona"] == "nutritionist"
    assert body["content"] == "Balanced breakfast, around 300 kcal."
    assert "Oatmeal" in fake_openai.requests[0].content.decode()

    listed = client.get("/evaluation-reports", headers=auth_headers).json()
    assert [r["id"] for r in listed] == [body["id"]]
    assert client.get(f"/evaluation-reports/{body['id']}", headers=auth_headers).status_code == 200


def test_report_for_other_users_recipe_is_not_found(client, db_session, auth_headers, fake_openai):
    recipe = _recipe(db_session, user_id=2)
    response = client.post("/evaluation-reports", json={"recipe_id": recipe.id}, headers=auth_headers)
    assert response.status_code == 404
    assert fake_openai.requests == []


def test_delete_report(client, db_session, auth_headers, other_user_token, fake_openai):
    recipe = _recipe(db_session)
    fake_openai.reply("Fine.")
    report_id = client.post("/evaluation-reports", json={"recipe_id": recipe.id}, headers=auth_headers).json()["id"]

    other_headers = {"Authorization": f"Bearer {other_user_token}"}
    assert client.delete(f"/evaluation-reports/{report_id}", headers=other_headers).status_code == 404
    assert client.delete(f"/evaluation-reports/{report_id}", headers=auth_headers).status_code == 204
    assert client.get(f"/evaluation-reports/{report_id}", headers=auth_headers).status_code == 404


def test_provider_failure_is_bad_gateway(client, db_session, auth_headers, fake_openai):
    recipe = _recipe(db_session)
    fake_openai.queue(400, json={"error": {"message": "bad"}})
    response = client.post("/evaluation-reports", json={"recipe_id": recipe.id}, headers=auth_headers)
    assert response.status_code == 502
