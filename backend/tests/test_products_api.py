"""
End-to-end tests for the /api/products endpoints, including image storage.
"""

from decimal import Decimal

from conftest import png_data_uri


def product_payload(image: str, **overrides) -> dict:
    payload = {"name": "Produto 3", "price": "300.00", "image": image}
    payload.update(overrides)
    return payload


class TestListProducts:
    """GET /api/products"""

    def test_lists_seeded_products(self, client, seed_products):
        response = client.get("/api/products")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [p["name"] for p in data] == ["Produto 1", "Produto 2"]
        assert Decimal(data[1]["price"]) == Decimal("200.00")
        assert data[0]["image"] == "Imagem1.png"

    def test_sort_by_price_descending(self, client, seed_products):
        response = client.get("/api/products", params={"sortBy": "price", "sortOrder": "desc"})

        assert [p["name"] for p in response.json()["data"]] == ["Produto 2", "Produto 1"]

    def test_customer_sort_fields_do_not_apply(self, client, seed_products):
        response = client.get("/api/products", params={"sortBy": "company"})

        assert response.status_code == 400
        assert response.json()["errors"]["sortBy"] == ["sortBy must be one of: id, name, price."]


class TestCreateProduct:
    """POST /api/products"""

    def test_stores_image_and_keeps_file_name(self, client, image_storage, image_data_uri):
        response = client.post("/api/products", json=product_payload(image_data_uri))

        assert response.status_code == 201
        created = response.json()["data"]
        assert created["name"] == "Produto 3"
        assert Decimal(created["price"]) == Decimal("300.00")
        assert created["image"].endswith(".png")
        assert response.headers["Location"].endswith(f"/api/products/{created['id']}")

        stored = image_storage.base_dir / created["image"]
        assert stored.read_bytes().startswith(b"\x89PNG")

    def test_rejects_plain_file_name_as_image(self, client, image_storage):
        response = client.post("/api/products", json=product_payload("Imagem3.png"))

        assert response.status_code == 400
        messages = response.json()["errors"]["image"]
        assert len(messages) == 1
        assert messages[0].startswith("Invalid image:")
        assert not image_storage.base_dir.exists()

    def test_rejects_disallowed_image_type(self, client):
        response = client.post(
            "/api/products",
            json=product_payload("data:image/svg+xml;base64,PHN2Zz48L3N2Zz4="),
        )

        assert response.status_code == 400
        assert "not allowed" in response.json()["errors"]["image"][0]

    def test_missing_fields_and_negative_price(self, client):
        response = client.post("/api/products", json={"price": "-1"})

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "name": ["The name field is required."],
            "price": ["The price field must be zero or greater."],
            "image": ["The image field is required."],
        }

    def test_non_numeric_price_is_400(self, client, image_data_uri):
        response = client.post(
            "/api/products", json=product_payload(image_data_uri, price="cheap")
        )

        assert response.status_code == 400
        assert "price" in response.json()["errors"]


class TestUpdateProduct:
    """PUT /api/products/{id}"""

    def test_replaces_image_file(self, client, image_storage, image_data_uri):
        created = client.post("/api/products", json=product_payload(image_data_uri)).json()["data"]
        old_file = image_storage.base_dir / created["image"]

        response = client.put(
            f"/api/products/{created['id']}",
            json=product_payload(png_data_uri(b"\x89PNG\r\n\x1a\nnew"), name="Produto 3B", price="310"),
        )

        assert response.status_code == 200
        updated = response.json()["data"]
        assert updated["name"] == "Produto 3B"
        assert Decimal(updated["price"]) == Decimal("310")
        assert updated["image"] != created["image"]
        assert not old_file.exists()
        assert (image_storage.base_dir / updated["image"]).read_bytes().endswith(b"new")

    def test_missing_product_stores_nothing(self, client, image_storage, image_data_uri):
        response = client.put("/api/products/999", json=product_payload(image_data_uri))

        assert response.status_code == 404
        assert not image_storage.base_dir.exists() or not any(image_storage.base_dir.iterdir())


class TestDeleteProduct:
    """DELETE /api/products/{id}"""

    def test_removes_product_and_image(self, client, image_storage, image_data_uri):
        created = client.post("/api/products", json=product_payload(image_data_uri)).json()["data"]

        response = client.delete(f"/api/products/{created['id']}")

        assert response.status_code == 204
        assert not (image_storage.base_dir / created["image"]).exists()
        assert client.get(f"/api/products/{created['id']}").status_code == 404

    def test_product_on_a_sale_cannot_be_deleted(self, client, seed_sale):
        product_id = seed_sale.items[0].product_id

        response = client.delete(f"/api/products/{product_id}")

        assert response.status_code == 500
        assert response.json()["detail"] == "error deleting resource"
