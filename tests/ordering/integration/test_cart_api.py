"""Integration tests for the cart endpoints."""


class TestCartEndpoints:
    def test_add_and_get(self, client, auth_headers):
        client.post("/api/cart/add", json={"itemId": "P1", "quantity": 2}, headers=auth_headers)
        response = client.post("/api/cart/add", json={"itemId": "P1", "quantity": 3}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["cartData"] == {"P1": 5}

        response = client.post("/api/cart/get", headers=auth_headers)
        assert response.json() == {"success": True, "message": "Cart retrieved", "cartData": {"P1": 5}}

    def test_add_requires_item_id(self, client, auth_headers):
        response = client.post("/api/cart/add", json={"quantity": 1}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Item ID is required"

    def test_add_rejects_non_positive_quantity(self, client, auth_headers):
        response = client.post("/api/cart/add", json={"itemId": "P1", "quantity": 0}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Quantity must be a positive number"

    def test_add_rejects_boolean_quantity(self, client, auth_headers):
        response = client.post("/api/cart/add", json={"itemId": "P1", "quantity": True}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Quantity must be a whole number"
        assert client.post("/api/cart/get", headers=auth_headers).json()["cartData"] == {}

    def test_add_accepts_integer_string(self, client, auth_headers):
        response = client.post("/api/cart/add", json={"itemId": "P1", "quantity": "2"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["cartData"] == {"P1": 2}

    def test_update_zero_removes(self, client, auth_headers):
        client.post("/api/cart/add", json={"itemId": "P1", "quantity": 2}, headers=auth_headers)
        response = client.post("/api/cart/update", json={"itemId": "P1", "quantity": 0}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["cartData"] == {}
        assert response.json()["message"] == "Item removed from cart"

    def test_update_negative(self, client, auth_headers):
        response = client.post("/api/cart/update", json={"itemId": "P1", "quantity": -1}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Quantity must be a non-negative number"

    def test_remove_missing_item(self, client, auth_headers):
        response = client.post("/api/cart/remove", json={"itemId": "P1"}, headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Item not found in cart"

    def test_clear_and_count(self, client, auth_headers):
        client.post("/api/cart/add", json={"itemId": "P1", "quantity": 2}, headers=auth_headers)
        client.post("/api/cart/add", json={"itemId": "P2", "quantity": 1}, headers=auth_headers)

        response = client.post("/api/cart/count", headers=auth_headers)
        assert response.json() == {"success": True, "count": 3, "uniqueItems": 2}

        response = client.post("/api/cart/clear", headers=auth_headers)
        assert response.json()["cartData"] == {}

    def test_requires_authentication(self, client):
        response = client.post("/api/cart/get")
        assert response.status_code == 401

    def test_admin_token_cannot_use_cart(self, client, admin_headers):
        response = client.post("/api/cart/get", headers=admin_headers)
        assert response.status_code == 401
