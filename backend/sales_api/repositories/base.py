"""
Base Repository implementation.
Provides the generic paged/sortable data access shared by every entity.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from shared.config.constants import DEFAULT_SORT_BY, SortOrder
from shared.utils.exceptions import InvalidSortFieldError

if TYPE_CHECKING:
    from sales_api.services.communication import PagedRequest


ModelT = TypeVar("ModelT")


class CrudRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with CRUD operations.

    Writes (add/update/delete) only stage changes in the session; the
    UnitOfWork commits them.

    Subclasses must implement:
    - model: Return the SQLAlchemy model class
    - sortable_fields: Public sort names mapped to model columns (class attribute)
    """

    # Public sort field names mapped to model columns
    sortable_fields: ClassVar[dict[str, Any]] = {}

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    def _load_options(self) -> list[Any]:
        """Eager loading options applied to every read. Override for relations."""
        return []

    def _base_query(self) -> Select:
        """Return base query with the entity's eager loading."""
        query = select(self.model)
        options = self._load_options()
        if options:
            query = query.options(*options)
        return query

    def _order_by(self, sort_by: str, sort_order: str) -> list[Any]:
        """
        Translate a public sort name into ORDER BY clauses.

        Raises:
            InvalidSortFieldError: sort_by is not in sortable_fields.
        """
        column = self.sortable_fields.get(sort_by)
        if column is None:
            raise InvalidSortFieldError(
                self.model.__name__.lower(), sort_by, sorted(self.sortable_fields)
            )

        clauses = [column.desc() if sort_order == SortOrder.DESC else column.asc()]
        # id as tie breaker keeps page boundaries stable
        if sort_by != DEFAULT_SORT_BY:
            clauses.append(self.model.id.asc())
        return clauses

    def list_paged(self, request: PagedRequest) -> tuple[Sequence[ModelT], int]:
        """
        Fetch one page of entities plus the total count of the unpaged set.

        Args:
            request: Page number (1-based), page size and sort

        Returns:
            (page items, total count)
        """
        order_by = self._order_by(request.sort_by, request.sort_order)
        offset = (request.page - 1) * request.page_size

        query = (
            self._base_query()
            .order_by(*order_by)
            .offset(offset)
            .limit(request.page_size)
        )
        items = self._db.execute(query).scalars().unique().all()

        return items, self.count()

    def count(self) -> int:
        """Count all entities."""
        query = select(func.count()).select_from(self.model)
        return self._db.scalar(query) or 0

    def find_by_id(self, entity_id: int) -> ModelT | None:
        """
        Find entity by ID.

        An instance already loaded in this session is refreshed from the
        database, so relations follow foreign keys changed by an update.
        """
        query = (
            self._base_query()
            .where(self.model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return self._db.execute(query).scalars().unique().first()

    def add(self, entity: ModelT) -> None:
        """Stage a new entity for insertion."""
        self._db.add(entity)

    def update(self, entity: ModelT) -> None:
        """Stage changes to an entity (tracked entities are already staged)."""
        self._db.add(entity)

    def delete(self, entity: ModelT) -> None:
        """Stage an entity for physical deletion."""
        self._db.delete(entity)

    def _related(self, entity: ModelT) -> list[Any]:
        """Eagerly loaded objects outside the entity's expunge cascade. Override for relations."""
        return []

    def detach(self, entity: ModelT) -> None:
        """
        Remove an entity and its loaded relations from the session.

        Detached objects are no longer touched by this session: a later
        populate_existing read loads a fresh instance and a rollback does
        not expire them. Used before an entity is handed to the cache.
        """
        for obj in [entity, *self._related(entity)]:
            if obj is not None and obj in self._db:
                self._db.expunge(obj)
