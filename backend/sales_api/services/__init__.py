"""
Services module for business logic.

- communication.py: Response, ErrorKind, PagedRequest, PagedResult
- base_service.py: Generic CrudService (cache-aside reads, invalidation on write)
- domain/: Entity services (merge rules per entity)
- media.py: Product image storage

Usage:
    from sales_api.services.domain import SaleService
    from sales_api.services.communication import PagedRequest
"""
