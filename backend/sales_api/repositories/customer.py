"""
Customer Repository - Data access for customers.
"""

from sqlalchemy.orm import Session

from sales_api.models import Customer
from .base import CrudRepository


class CustomerRepository(CrudRepository[Customer]):
    """Repository for Customer entities."""

    sortable_fields = {
        "id": Customer.id,
        "name": Customer.name,
        "phone": Customer.phone,
        "company": Customer.company,
    }

    @property
    def model(self) -> type[Customer]:
        return Customer


def get_customer_repository(db: Session) -> CustomerRepository:
    """Factory function for dependency injection."""
    return CustomerRepository(db)
