"""
Sale Repository - Data access for sales.
Eager loading prevents N+1 queries when rendering customer and product names.
"""

from typing import Any

from sqlalchemy.orm import Session, joinedload, selectinload

from sales_api.models import LineItem, Sale
from .base import CrudRepository


class SaleRepository(CrudRepository[Sale]):
    """
    Repository for Sale entities.

    Guarantees eager loading of:
    - customer
    - items -> product
    """

    sortable_fields = {
        "id": Sale.id,
        "date": Sale.date,
        "totalAmount": Sale.total_amount,
        "customerId": Sale.customer_id,
    }

    @property
    def model(self) -> type[Sale]:
        return Sale

    def _load_options(self) -> list[Any]:
        return [
            joinedload(Sale.customer),
            selectinload(Sale.items).joinedload(LineItem.product),
        ]

    def _related(self, sale: Sale) -> list[Any]:
        # items follow the sale through its cascade; customer and products do not
        return [sale.customer, *(item.product for item in sale.items)]


def get_sale_repository(db: Session) -> SaleRepository:
    """Factory function for dependency injection."""
    return SaleRepository(db)
