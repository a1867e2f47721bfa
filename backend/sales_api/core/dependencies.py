"""
FastAPI dependencies that assemble the CRUD services for a request.

The cache lives on app.state (created in the lifespan); tests replace it
with app.dependency_overrides[get_cache_service].
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from sales_api.repositories import (
    get_customer_repository,
    get_product_repository,
    get_sale_repository,
    get_unit_of_work,
)
from sales_api.services.domain import CustomerService, ProductService, SaleService
from shared.infrastructure.cache import CacheService
from shared.infrastructure.db import get_db


def get_cache_service(request: Request) -> CacheService:
    """Process-wide cache created at startup."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        raise RuntimeError("Cache service not initialized (application lifespan did not run)")
    return cache


def get_customer_service(
    db: Session = Depends(get_db),
    cache: CacheService = Depends(get_cache_service),
) -> CustomerService:
    return CustomerService(get_customer_repository(db), get_unit_of_work(db), cache)


def get_product_service(
    db: Session = Depends(get_db),
    cache: CacheService = Depends(get_cache_service),
) -> ProductService:
    return ProductService(get_product_repository(db), get_unit_of_work(db), cache)


def get_sale_service(
    db: Session = Depends(get_db),
    cache: CacheService = Depends(get_cache_service),
) -> SaleService:
    return SaleService(get_sale_repository(db), get_unit_of_work(db), cache)
