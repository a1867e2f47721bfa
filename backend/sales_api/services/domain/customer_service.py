"""
Customer Service.

Usage:
    from sales_api.services.domain import CustomerService

    service = CustomerService(repository, unit_of_work, cache)
    result = service.update(customer_id, Customer(name="ACME", phone="...", company="..."))
"""

from sales_api.models import Customer
from sales_api.services.base_service import CrudService


class CustomerService(CrudService[Customer]):
    """Service for customer management."""

    def merge_fields(self, existing: Customer, incoming: Customer) -> None:
        existing.name = incoming.name
        existing.phone = incoming.phone
        existing.company = incoming.company
