"""Integration tests for the product endpoints."""

FORM = {
    "name": "Sourdough",
    "description": "Naturally leavened loaf",
    "price": "150",
    "category": "Bread",
    "popular": "true",
}


def _image():
    return {"image": ("loaf.jpg", b"\xff\xd8\xff fake jpeg", "image/jpeg")}


class TestAddProductEndpoint:
    def test_admin_adds_product(self, client, admin_headers, services):
        response = client.post("/api/products/add", data=FORM, files=_image(), headers=admin_headers)

        assert response.status_code == 201
        product = response.json()["product"]
        assert product["name"] == "Sourdough"
        assert product["price"] == 150.0
        assert product["category"] == "bread"
        assert product["popular"] is True
        assert product["image"] == services.images.uploads[0]["url"]

    def test_accepts_image1_field(self, client, admin_headers, services):
        files = {"image1": ("loaf.png", b"\x89PNG fake png", "image/png")}

        response = client.post("/api/products/add", data=FORM, files=files, headers=admin_headers)

        assert response.status_code == 201
        assert services.images.uploads[0]["filename"] == "loaf.png"
        assert response.json()["product"]["image"] == services.images.uploads[0]["url"]

    def test_requires_image(self, client, admin_headers):
        response = client.post("/api/products/add", data=FORM, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Product image is required"

    def test_reports_missing_fields(self, client, admin_headers):
        response = client.post("/api/products/add", data={"price": "10"}, files=_image(), headers=admin_headers)
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert "Product name is required" in body["details"]

    def test_upload_failure(self, client, admin_headers, services):
        services.images.configure(should_succeed=False)
        response = client.post("/api/products/add", data=FORM, files=_image(), headers=admin_headers)
        assert response.status_code == 500
        assert response.json()["message"] == "Failed to upload image"

    def test_shopper_is_forbidden(self, client, auth_headers):
        response = client.post("/api/products/add", data=FORM, files=_image(), headers=auth_headers)
        assert response.status_code == 403

    def test_anonymous_is_unauthorized(self, client):
        response = client.post("/api/products/add", data=FORM, files=_image())
        assert response.status_code == 401


class TestReadEndpoints:
    def test_list_newest_first(self, client, make_product):
        make_product(name="Older")
        make_product(name="Newer")

        response = client.get("/api/products/list")
        assert response.status_code == 200
        assert [p["name"] for p in response.json()["products"]] == ["Newer", "Older"]

    def test_single(self, client, make_product):
        product = make_product()
        response = client.get(f"/api/products/single/{product.id}")
        assert response.status_code == 200
        assert response.json()["product"]["id"] == str(product.id)

    def test_single_missing(self, client):
        response = client.get("/api/products/single/unknown")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Product not found"}


class TestRemoveEndpoint:
    def test_admin_removes(self, client, admin_headers, make_product):
        product = make_product()
        response = client.delete(f"/api/products/remove/{product.id}", headers=admin_headers)
        assert response.status_code == 200

        assert client.get(f"/api/products/single/{product.id}").status_code == 404

    def test_remove_missing(self, client, admin_headers):
        response = client.delete("/api/products/remove/unknown", headers=admin_headers)
        assert response.status_code == 404
