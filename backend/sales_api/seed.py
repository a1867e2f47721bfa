"""
Seed data for development and testing.
Creates two customers, two products and one sale with a single item.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from sales_api.models import Customer, LineItem, Product, Sale
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit

logger = get_logger(__name__)


DEFAULT_CUSTOMERS = [
    {"name": "Cliente 1", "phone": "11987654321", "company": "Empresa 1"},
    {"name": "Cliente 2", "phone": "11987654322", "company": "Empresa 2"},
]

DEFAULT_PRODUCTS = [
    {"name": "Produto 1", "price": Decimal("100.00"), "image": "Imagem1.png"},
    {"name": "Produto 2", "price": Decimal("200.00"), "image": "Imagem2.png"},
]


def seed_customers(db: Session) -> list[Customer]:
    customers = [Customer(**data) for data in DEFAULT_CUSTOMERS]
    db.add_all(customers)
    return customers


def seed_products(db: Session) -> list[Product]:
    products = [Product(**data) for data in DEFAULT_PRODUCTS]
    db.add_all(products)
    return products


def seed(db: Session) -> bool:
    """
    Insert the demo data set.
    Idempotent: only inserts if no customer exists yet.

    Returns:
        True if data was inserted, False if the database was already seeded.
    """
    if db.scalar(select(Customer.id).limit(1)):
        logger.info("Database already seeded, skipping")
        return False

    customers = seed_customers(db)
    products = seed_products(db)

    db.add(
        Sale(
            date=datetime(2025, 9, 1),
            total_amount=Decimal("100.00"),
            customer=customers[0],
            items=[
                LineItem(
                    quantity=1,
                    unit_price=products[0].price,
                    product=products[0],
                )
            ],
        )
    )

    safe_commit(db)
    logger.info(
        "Seed data created",
        customers=len(customers),
        products=len(products),
        sales=1,
    )
    return True
