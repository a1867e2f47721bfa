"""
Cache behaviour across requests that each get their own database session.

Entities read by one request are cached and served to later requests, so
they must stay usable after the session that loaded them has been closed,
rolled back or reused by a write.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import DataError
from sqlalchemy.orm import Session

from conftest import png_data_uri


def commit_overflow():
    """Make the next commits fail the way an out-of-range numeric column does."""
    return patch.object(
        Session,
        "commit",
        side_effect=DataError("UPDATE produtos", {}, Exception("numeric field overflow")),
    )


class TestReadUpdateRead:

    def test_update_replaces_cached_customer_and_list(self, session_client, seed_customers):
        customer_id = seed_customers[0].id
        assert session_client.get(f"/api/customers/{customer_id}").json()["data"]["name"] == "Cliente 1"
        assert session_client.get("/api/customers").status_code == 200

        response = session_client.put(
            f"/api/customers/{customer_id}",
            json={"name": "Cliente Renomeado", "phone": "11900000000", "company": "Empresa 1"},
        )
        assert response.status_code == 200

        fetched = session_client.get(f"/api/customers/{customer_id}")
        listed = session_client.get("/api/customers")

        assert fetched.status_code == 200
        assert fetched.json()["data"]["name"] == "Cliente Renomeado"
        assert [c["name"] for c in listed.json()["data"]] == ["Cliente Renomeado", "Cliente 2"]

    def test_cached_sale_list_survives_later_requests(self, session_client, seed_sale, seed_products):
        first = session_client.get("/api/sales")
        second = session_client.get("/api/sales")

        assert second.status_code == 200
        assert second.json() == first.json()
        assert second.json()["data"][0]["customerName"] == "Cliente 1"
        assert second.json()["data"][0]["items"][0]["productName"] == "Produto 1"

        response = session_client.put(
            f"/api/sales/{seed_sale.id}",
            json={
                "date": "2025-09-03T09:00:00",
                "totalAmount": "400.00",
                "customerId": seed_sale.customer_id,
                "items": [{"quantity": 2, "unitPrice": "200.00", "productId": seed_products[1].id}],
            },
        )
        assert response.status_code == 200

        sale = session_client.get("/api/sales").json()["data"][0]
        assert Decimal(sale["totalAmount"]) == Decimal("400.00")
        assert [i["productName"] for i in sale["items"]] == ["Produto 2"]


class TestFailedWrite:

    @pytest.mark.parametrize("warm_cache", [False, True])
    def test_failed_product_update_keeps_product_readable(
        self, session_client, image_storage, seed_products, warm_cache
    ):
        product_id = seed_products[0].id
        if warm_cache:
            assert session_client.get(f"/api/products/{product_id}").status_code == 200

        with commit_overflow():
            response = session_client.put(
                f"/api/products/{product_id}",
                json={"name": "Produto Caro", "price": "999999999.99", "image": png_data_uri()},
            )

        assert response.status_code == 500
        assert response.json()["detail"] == "error updating resource"

        fetched = session_client.get(f"/api/products/{product_id}")
        assert fetched.status_code == 200
        product = fetched.json()["data"]
        assert product["name"] == "Produto 1"
        assert Decimal(product["price"]) == Decimal("100.00")
        assert product["image"] == "Imagem1.png"
        assert list(image_storage.base_dir.glob("*")) == []

    def test_failed_customer_update_does_not_leak_into_list(self, session_client, seed_customers):
        assert session_client.get("/api/customers").status_code == 200

        with commit_overflow():
            response = session_client.put(
                f"/api/customers/{seed_customers[1].id}",
                json={"name": "Nunca Salvo", "phone": "11900000000", "company": "Empresa 2"},
            )
        assert response.status_code == 500

        listed = session_client.get("/api/customers")
        assert listed.status_code == 200
        assert [c["name"] for c in listed.json()["data"]] == ["Cliente 1", "Cliente 2"]
