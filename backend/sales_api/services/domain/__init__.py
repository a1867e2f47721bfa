"""
Domain Services - entity-specific CRUD services.

Structure:
    Router (thin controller)
        ↓
    Service (caching, error classification)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from sales_api.services.domain import CustomerService

    # In router
    service = CustomerService(get_customer_repository(db), get_unit_of_work(db), cache)
    result = service.list_paged(PagedRequest(page=1, page_size=10))
"""

from .customer_service import CustomerService
from .product_service import ProductService
from .sale_service import SaleService

__all__ = [
    "CustomerService",
    "ProductService",
    "SaleService",
]
