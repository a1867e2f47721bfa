"""
Tests for the demo data seed.
"""

from decimal import Decimal

from sales_api.models import Customer, LineItem, Product, Sale
from sales_api.seed import seed


def test_seed_creates_demo_data(db_session):
    assert seed(db_session) is True

    assert db_session.query(Customer).count() == 2
    assert db_session.query(Product).count() == 2
    sale = db_session.query(Sale).one()
    assert sale.customer.name == "Cliente 1"
    assert sale.total_amount == Decimal("100.00")
    assert [item.product.name for item in sale.items] == ["Produto 1"]


def test_seed_is_idempotent(db_session):
    seed(db_session)

    assert seed(db_session) is False
    assert db_session.query(Customer).count() == 2
    assert db_session.query(LineItem).count() == 1
