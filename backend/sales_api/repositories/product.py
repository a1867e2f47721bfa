"""
Product Repository - Data access for products.
"""

from sqlalchemy.orm import Session

from sales_api.models import Product
from .base import CrudRepository


class ProductRepository(CrudRepository[Product]):
    """Repository for Product entities."""

    sortable_fields = {
        "id": Product.id,
        "name": Product.name,
        "price": Product.price,
    }

    @property
    def model(self) -> type[Product]:
        return Product


def get_product_repository(db: Session) -> ProductRepository:
    """Factory function for dependency injection."""
    return ProductRepository(db)
