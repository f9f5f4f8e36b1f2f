"""Integration tests for the recipe suggestion endpoint."""


class TestGenerateRecipe:
    def test_requires_authentication(self, client):
        response = client.post("/api/recipes/generate", json={"dishName": "scones"})
        assert response.status_code == 401

    def test_dish_name_required(self, client, auth_headers):
        response = client.post("/api/recipes/generate", json={"ingredients": ["flour"]}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Dish name is required"

    def test_generated_recipe(self, client, auth_headers, services):
        services.recipes.configure("Scones\n\nIngredients:\n- flour")

        response = client.post("/api/recipes/generate", json={"dishName": "scones"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "recipe": "Scones\n\nIngredients:\n- flour"}

    def test_fallback_after_overload(self, client, auth_headers, services):
        services.recipes.fail_with(503, times=3)

        response = client.post(
            "/api/recipes/generate",
            json={"dishName": "scones", "ingredients": ["flour", "butter"]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["fallback"] is True
        assert body["message"]
        assert "- flour\n- butter" in body["recipe"]
        assert services.delays == [4.0, 6.0]

    def test_admin_may_ask(self, client, admin_headers):
        response = client.post("/api/recipes/generate", json={"dishName": "scones"}, headers=admin_headers)
        assert response.status_code == 200
