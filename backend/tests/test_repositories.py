"""
Tests for the repositories against an in-memory SQLite database.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from sales_api.models import Customer, LineItem, Sale
from sales_api.repositories import (
    get_customer_repository,
    get_product_repository,
    get_sale_repository,
    get_unit_of_work,
)
from sales_api.services.communication import PagedRequest
from shared.utils.exceptions import InvalidSortFieldError


@pytest.fixture
def many_customers(db_session):
    """Twelve customers, the last two sharing a company name."""
    customers = [
        Customer(name=f"Cliente {i:02d}", phone=f"1198765{i:04d}", company=f"Empresa {i:02d}")
        for i in range(1, 11)
    ]
    customers += [
        Customer(name="Zeta", phone="1", company="Same"),
        Customer(name="Alfa", phone="2", company="Same"),
    ]
    db_session.add_all(customers)
    db_session.commit()
    return customers


class TestListPaged:
    """Tests for CrudRepository.list_paged()"""

    def test_first_page_by_id(self, db_session, many_customers):
        repo = get_customer_repository(db_session)

        items, total = repo.list_paged(PagedRequest(page=1, page_size=5))

        assert total == 12
        assert [c.id for c in items] == [c.id for c in many_customers[:5]]

    def test_last_partial_page(self, db_session, many_customers):
        repo = get_customer_repository(db_session)

        items, total = repo.list_paged(PagedRequest(page=3, page_size=5))

        assert total == 12
        assert len(items) == 2

    def test_page_past_the_end_is_empty(self, db_session, many_customers):
        repo = get_customer_repository(db_session)

        items, total = repo.list_paged(PagedRequest(page=10, page_size=5))

        assert items == []
        assert total == 12

    def test_sort_descending(self, db_session, many_customers):
        repo = get_customer_repository(db_session)

        items, _ = repo.list_paged(PagedRequest(page_size=3, sort_by="name", sort_order="desc"))

        assert [c.name for c in items] == ["Zeta", "Cliente 10", "Cliente 09"]

    def test_ties_are_broken_by_id(self, db_session, many_customers):
        repo = get_customer_repository(db_session)

        items, _ = repo.list_paged(
            PagedRequest(page=1, page_size=2, sort_by="company", sort_order="desc")
        )

        # Both "Same" rows tie on company; the lower id comes first
        assert [c.name for c in items] == ["Zeta", "Alfa"]

    def test_unknown_sort_field_raises(self, db_session):
        repo = get_customer_repository(db_session)

        with pytest.raises(InvalidSortFieldError) as exc_info:
            repo.list_paged(PagedRequest(sort_by="password"))

        assert exc_info.value.field == "password"
        assert exc_info.value.allowed == ["company", "id", "name", "phone"]

    def test_empty_table(self, db_session):
        repo = get_product_repository(db_session)

        items, total = repo.list_paged(PagedRequest())

        assert items == []
        assert total == 0

    def test_products_sort_by_price(self, db_session, seed_products):
        repo = get_product_repository(db_session)

        items, _ = repo.list_paged(PagedRequest(sort_by="price", sort_order="desc"))

        assert [p.name for p in items] == ["Produto 2", "Produto 1"]


class TestSaleLoading:
    """Sales come back with customer and item products loaded."""

    def test_list_loads_relations(self, db_session, seed_sale):
        db_session.expunge_all()
        repo = get_sale_repository(db_session)

        items, total = repo.list_paged(PagedRequest())
        db_session.expunge_all()

        assert total == 1
        sale = items[0]
        assert sale.customer.name == "Cliente 1"
        assert len(sale.items) == 1
        assert sale.items[0].product.name == "Produto 1"

    def test_find_by_id_loads_relations(self, db_session, seed_sale):
        db_session.expunge_all()
        repo = get_sale_repository(db_session)

        sale = repo.find_by_id(seed_sale.id)
        db_session.expunge_all()

        assert sale.customer.name == "Cliente 1"
        assert sale.items[0].product.name == "Produto 1"
        assert sale.items[0].total == Decimal("100.00")

    def test_find_missing_returns_none(self, db_session):
        assert get_sale_repository(db_session).find_by_id(999) is None

    def test_sort_by_total_amount(self, db_session, seed_sale, seed_customers, seed_products):
        db_session.add(
            Sale(
                date=datetime(2025, 9, 2),
                total_amount=Decimal("50.00"),
                customer_id=seed_customers[1].id,
                items=[LineItem(quantity=1, unit_price=Decimal("50.00"), product_id=seed_products[1].id)],
            )
        )
        db_session.commit()
        repo = get_sale_repository(db_session)

        items, _ = repo.list_paged(PagedRequest(sort_by="totalAmount"))

        assert [s.total_amount for s in items] == [Decimal("50.00"), Decimal("100.00")]


class TestWrites:
    """Writes are staged until the unit of work completes."""

    def test_add_is_visible_after_complete(self, db_session):
        repo = get_customer_repository(db_session)
        customer = Customer(name="Cliente 3", phone="11987654323", company="Empresa 3")

        repo.add(customer)
        get_unit_of_work(db_session).complete()

        assert customer.id is not None
        assert repo.count() == 1

    def test_delete_sale_removes_its_items(self, db_session, seed_sale):
        repo = get_sale_repository(db_session)

        repo.delete(repo.find_by_id(seed_sale.id))
        get_unit_of_work(db_session).complete()

        assert repo.count() == 0
        assert db_session.query(LineItem).count() == 0

    def test_find_by_id_follows_changed_foreign_key(self, db_session, seed_sale, seed_customers):
        repo = get_sale_repository(db_session)
        sale = repo.find_by_id(seed_sale.id)

        sale.customer_id = seed_customers[1].id
        get_unit_of_work(db_session).complete()
        reloaded = repo.find_by_id(seed_sale.id)

        assert reloaded is sale
        assert reloaded.customer.name == "Cliente 2"


class TestDetach:
    """Entities handed to the cache leave the session with their loaded relations."""

    def test_detached_sale_is_not_reused_or_expired(self, db_session, seed_sale):
        db_session.expunge_all()
        repo = get_sale_repository(db_session)
        sale = repo.find_by_id(seed_sale.id)

        repo.detach(sale)
        fresh = repo.find_by_id(seed_sale.id)
        fresh.total_amount = Decimal("1.00")
        db_session.rollback()

        assert fresh is not sale
        assert sale not in db_session
        assert sale.customer not in db_session
        assert sale.items[0] not in db_session
        assert sale.items[0].product not in db_session
        assert sale.total_amount == Decimal("100.00")
        assert sale.customer.name == "Cliente 1"
        assert sale.items[0].product.name == "Produto 1"

    def test_detach_of_unattached_entity_is_a_no_op(self, db_session):
        repo = get_customer_repository(db_session)
        customer = Customer(name="Solto", phone="1", company="X")

        repo.detach(customer)

        assert customer not in db_session
