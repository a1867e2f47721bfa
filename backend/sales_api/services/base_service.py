"""
Generic CRUD service.

Architecture:
    Router (thin) → Service (caching, error classification) → Repository (data access) → Model

Reads go through the cache (cache-aside). Every write, successful or not,
removes all cache entries of the entity type, paged lists and single lookups
alike. Entities are detached from the request session before they are
cached, so a cached object is never changed or expired by a later write in
that session.

Every public method returns a Response and never raises:
- not found → ErrorKind.NOT_FOUND
- SQLAlchemyError / StoreError → ErrorKind.DATABASE_ERROR
- anything else → ErrorKind.UNKNOWN (on writes this includes a failed cache
  invalidation after the commit, so the change may already be stored)

Usage:
    from sales_api.services.base_service import CrudService

    class CustomerService(CrudService[Customer]):
        def merge_fields(self, existing: Customer, incoming: Customer) -> None:
            existing.name = incoming.name
"""

from __future__ import annotations

from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from sales_api.models import Base
from sales_api.repositories import CrudRepository, UnitOfWork
from sales_api.services.communication import (
    ErrorKind,
    PagedRequest,
    PagedResult,
    Response,
)
from shared.config.constants import CacheKeys
from shared.config.logging import get_logger
from shared.infrastructure.cache import CacheService
from shared.utils.exceptions import StoreError

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

STORE_ERRORS = (SQLAlchemyError, StoreError)

UNEXPECTED_ERROR_MESSAGE = "unexpected error processing the request"


class CrudService(Generic[ModelT]):
    """
    Base service for entities with CRUD operations.

    Subclasses override merge_fields() to choose which fields an update
    copies onto the stored entity.
    """

    def __init__(
        self,
        repository: CrudRepository[ModelT],
        unit_of_work: UnitOfWork,
        cache: CacheService,
    ):
        self._repo = repository
        self._uow = unit_of_work
        self._cache = cache
        self._entity_name = repository.model.__name__.lower()

    @property
    def entity_name(self) -> str:
        """Lower-cased model name, used as cache key prefix."""
        return self._entity_name

    @property
    def repo(self) -> CrudRepository[ModelT]:
        """Repository for data access."""
        return self._repo

    # =========================================================================
    # Read Operations
    # =========================================================================

    def list_paged(self, request: PagedRequest) -> Response[PagedResult[ModelT]]:
        """
        List one page of entities, sorted.

        Args:
            request: Page, page size and sort.

        Returns:
            Response with a PagedResult, or DATABASE_ERROR.
        """
        try:
            if self._cache.is_enabled:
                key = CacheKeys.paged(
                    self._entity_name,
                    request.page,
                    request.page_size,
                    request.sort_by,
                    request.sort_order,
                )
                return self._cache.get_or_set(
                    key, lambda: self._detached(self._fetch_page(request))
                )

            return self._fetch_page(request)
        except Exception:
            logger.error(
                "Failed to list entities",
                entity=self._entity_name,
                page=request.page,
                page_size=request.page_size,
                sort_by=request.sort_by,
                exc_info=True,
            )
            return Response.fail(ErrorKind.DATABASE_ERROR, "error listing data")

    def find_by_id(self, entity_id: int) -> Response[ModelT]:
        """
        Get entity by ID.

        Returns:
            Response with the entity, NOT_FOUND, or DATABASE_ERROR.
        """
        try:
            if self._cache.is_enabled:
                key = CacheKeys.entity(self._entity_name, entity_id)
                return self._cache.get_or_set(
                    key, lambda: self._detached(self._fetch_one(entity_id))
                )

            return self._fetch_one(entity_id)
        except Exception:
            logger.error(
                "Failed to fetch entity",
                entity=self._entity_name,
                entity_id=entity_id,
                exc_info=True,
            )
            return Response.fail(ErrorKind.DATABASE_ERROR, "error fetching resource")

    # =========================================================================
    # Write Operations
    # =========================================================================

    def add(self, model: ModelT) -> Response[ModelT]:
        """
        Insert a new entity.

        The stored entity is read back by its new id so relations filled by
        the database are present in the result.
        """
        try:
            self._repo.add(model)
            self._uow.complete()

            created = self._repo.find_by_id(model.id)

            self._invalidate()

            logger.info("Entity created", entity=self._entity_name, entity_id=model.id)
            return Response.ok(created)
        except STORE_ERRORS:
            logger.error("Failed to add entity", entity=self._entity_name, exc_info=True)
            self._invalidate_after_failure()
            return Response.fail(ErrorKind.DATABASE_ERROR, "error adding resource")
        except Exception:
            logger.error(
                "Unexpected error adding entity", entity=self._entity_name, exc_info=True
            )
            self._invalidate_after_failure()
            return Response.fail(ErrorKind.UNKNOWN, UNEXPECTED_ERROR_MESSAGE)

    def update(self, entity_id: int, model: ModelT) -> Response[ModelT]:
        """
        Copy the fields chosen by merge_fields() onto the stored entity.

        Returns:
            Response with the updated entity, NOT_FOUND (nothing committed),
            DATABASE_ERROR or UNKNOWN.
        """
        try:
            existing = self._repo.find_by_id(entity_id)
            if existing is None:
                return Response.not_found(self._not_found_message(entity_id))

            self.merge_fields(existing, model)

            self._repo.update(existing)
            self._uow.complete()

            # Re-read the same identity so relations follow changed foreign keys
            self._repo.find_by_id(entity_id)

            self._invalidate()

            logger.info("Entity updated", entity=self._entity_name, entity_id=entity_id)
            return Response.ok(existing)
        except STORE_ERRORS:
            logger.error(
                "Failed to update entity",
                entity=self._entity_name,
                entity_id=entity_id,
                exc_info=True,
            )
            self._invalidate_after_failure()
            return Response.fail(ErrorKind.DATABASE_ERROR, "error updating resource")
        except Exception:
            logger.error(
                "Unexpected error updating entity",
                entity=self._entity_name,
                entity_id=entity_id,
                exc_info=True,
            )
            self._invalidate_after_failure()
            return Response.fail(ErrorKind.UNKNOWN, UNEXPECTED_ERROR_MESSAGE)

    def delete(self, entity_id: int) -> Response[ModelT]:
        """
        Physically delete an entity.

        Returns:
            Response with the entity's last known state, NOT_FOUND (nothing
            committed), DATABASE_ERROR or UNKNOWN.
        """
        try:
            existing = self._repo.find_by_id(entity_id)
            if existing is None:
                return Response.not_found(self._not_found_message(entity_id))

            self._repo.delete(existing)
            self._uow.complete()

            self._invalidate()

            logger.info("Entity deleted", entity=self._entity_name, entity_id=entity_id)
            return Response.ok(existing)
        except STORE_ERRORS:
            logger.error(
                "Failed to delete entity",
                entity=self._entity_name,
                entity_id=entity_id,
                exc_info=True,
            )
            self._invalidate_after_failure()
            return Response.fail(ErrorKind.DATABASE_ERROR, "error deleting resource")
        except Exception:
            logger.error(
                "Unexpected error deleting entity",
                entity=self._entity_name,
                entity_id=entity_id,
                exc_info=True,
            )
            self._invalidate_after_failure()
            return Response.fail(ErrorKind.UNKNOWN, UNEXPECTED_ERROR_MESSAGE)

    # =========================================================================
    # Hooks
    # =========================================================================

    def merge_fields(self, existing: ModelT, incoming: ModelT) -> None:
        """Copy updatable fields from incoming onto existing. Default: nothing."""

    # =========================================================================
    # Internals
    # =========================================================================

    def _fetch_page(self, request: PagedRequest) -> Response[PagedResult[ModelT]]:
        items, total_count = self._repo.list_paged(request)
        return Response.ok(
            PagedResult(
                data=list(items),
                page=request.page,
                page_size=request.page_size,
                total_count=total_count,
            )
        )

    def _fetch_one(self, entity_id: int) -> Response[ModelT]:
        entity = self._repo.find_by_id(entity_id)
        if entity is None:
            return Response.not_found(self._not_found_message(entity_id))
        return Response.ok(entity)

    def _invalidate(self) -> None:
        removed = self._cache.remove_by_prefix(CacheKeys.prefix(self._entity_name))
        logger.debug("Cache invalidated", entity=self._entity_name, removed=removed)

    def _invalidate_after_failure(self) -> None:
        """Drop the entity's cache entries after a failed write; never raises."""
        try:
            self._invalidate()
        except Exception:
            logger.warning(
                "Cache invalidation after failed write failed",
                entity=self._entity_name,
                exc_info=True,
            )

    def _detached(self, response: Response) -> Response:
        """Detach the entities of a successful read so the cache never holds session state."""
        if response.success:
            model = response.model
            entities = model.data if isinstance(model, PagedResult) else [model]
            for entity in entities:
                self._repo.detach(entity)
        return response

    @staticmethod
    def _not_found_message(entity_id: int) -> str:
        return f"resource with id {entity_id} not found"
