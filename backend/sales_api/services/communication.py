"""
Result types exchanged between the CRUD services and the routers.

Services never raise for expected outcomes: every operation returns a
Response whose error field tells the router which HTTP status to use.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Sequence, TypeVar

from shared.config.constants import DEFAULT_SORT_BY, Limits, SortOrder

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories of a service Response."""

    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"
    DATABASE_ERROR = "database_error"
    CONFLICT = "conflict"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Response(Generic[T]):
    """
    Success/failure wrapper returned by every service operation.

    Usage:
        result = service.find_by_id(1)
        if not result.success:
            ...  # result.error, result.message
        customer = result.model
    """

    success: bool
    model: T | None = None
    error: ErrorKind | None = None
    message: str | None = None

    @classmethod
    def ok(cls, model: T) -> "Response[T]":
        return cls(success=True, model=model)

    @classmethod
    def fail(cls, error: ErrorKind, message: str) -> "Response[T]":
        return cls(success=False, error=error, message=message)

    @classmethod
    def not_found(cls, message: str) -> "Response[T]":
        return cls.fail(ErrorKind.NOT_FOUND, message)


@dataclass
class PagedRequest:
    """
    Page number (1-based), page size and sort for a list query.

    Ranges are enforced at the API boundary; here only the sort order is
    normalized so "ASC" and "asc" share a cache key.
    """

    page: int = Limits.DEFAULT_PAGE
    page_size: int = Limits.DEFAULT_PAGE_SIZE
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = SortOrder.ASC

    def __post_init__(self):
        self.sort_order = self.sort_order.lower()

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass
class PagedResult(Generic[T]):
    """One page of entities plus the size of the whole set."""

    data: Sequence[T] = field(default_factory=list)
    page: int = Limits.DEFAULT_PAGE
    page_size: int = Limits.DEFAULT_PAGE_SIZE
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1
