"""
Repository Pattern implementation.
Centralizes data access with guaranteed eager loading and sort allow-lists.

Usage:
    from sales_api.repositories import get_sale_repository, get_unit_of_work

    repo = get_sale_repository(db)
    sales, total = repo.list_paged(PagedRequest(page=1, page_size=10))
    sale = repo.find_by_id(123)
"""

from .base import CrudRepository
from .customer import CustomerRepository, get_customer_repository
from .product import ProductRepository, get_product_repository
from .sale import SaleRepository, get_sale_repository
from .unit_of_work import UnitOfWork, get_unit_of_work

__all__ = [
    # Base
    "CrudRepository",
    "UnitOfWork",
    "get_unit_of_work",
    # Customer
    "CustomerRepository",
    "get_customer_repository",
    # Product
    "ProductRepository",
    "get_product_repository",
    # Sale
    "SaleRepository",
    "get_sale_repository",
]
