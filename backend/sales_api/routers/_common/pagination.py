"""
Paging and sorting query parameters for list endpoints.

Usage:
    from sales_api.routers._common.pagination import paged_request_dependency

    customer_paging = paged_request_dependency(CustomerRepository)

    @router.get("")
    def list_customers(paged: PagedRequest = Depends(customer_paging)):
        ...
"""

from typing import Callable

from fastapi import Query

from sales_api.repositories import CrudRepository
from sales_api.services.communication import PagedRequest
from shared.config.constants import DEFAULT_SORT_BY, Limits, SortOrder
from shared.utils.exceptions import ValidationError


def sortable_field_names(repository_cls: type[CrudRepository]) -> list[str]:
    """Public sort names of a repository (read from the class, no session needed)."""
    return sorted(repository_cls.sortable_fields)


def paged_request_dependency(
    repository_cls: type[CrudRepository],
) -> Callable[..., PagedRequest]:
    """
    Build a FastAPI dependency that parses page/pageSize/sortBy/sortOrder.

    sortBy is checked against the repository's sortable fields and
    sortOrder against asc/desc (any case); both fail with a 400 before the
    service runs.
    """
    allowed = sortable_field_names(repository_cls)

    def get_paged_request(
        page: int = Query(
            default=Limits.DEFAULT_PAGE,
            ge=1,
            description="Page number (1-based)",
        ),
        page_size: int = Query(
            default=Limits.DEFAULT_PAGE_SIZE,
            ge=1,
            le=Limits.MAX_PAGE_SIZE,
            alias="pageSize",
            description="Items per page",
        ),
        sort_by: str = Query(
            default=DEFAULT_SORT_BY,
            alias="sortBy",
            description=f"Sort field ({', '.join(allowed)})",
        ),
        sort_order: str = Query(
            default=SortOrder.ASC,
            alias="sortOrder",
            description="asc or desc",
        ),
    ) -> PagedRequest:
        errors: dict[str, list[str]] = {}
        if sort_by not in allowed:
            errors["sortBy"] = [f"sortBy must be one of: {', '.join(allowed)}."]
        if sort_order.lower() not in SortOrder.ALL:
            errors["sortOrder"] = ["sortOrder must be 'asc' or 'desc'."]
        if errors:
            raise ValidationError(errors=errors)

        return PagedRequest(
            page=page,
            page_size=page_size,
            sort_by=sort_by,
            sort_order=sort_order,
        )

    return get_paged_request
