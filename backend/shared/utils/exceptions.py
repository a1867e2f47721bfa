"""
Centralized exceptions for consistent error handling.

Two families live here:

- StoreError: raised by the persistence layer (repositories). The CRUD
  services classify these, together with SQLAlchemyError, as database
  errors.
- AppException: HTTP errors raised at the API boundary (routers and their
  dependencies), logged on construction and rendered as problem details.

Usage:
    from shared.utils.exceptions import InvalidSortFieldError, ValidationError

    raise InvalidSortFieldError("customer", "password")
    raise ValidationError(errors={"name": ["The name field is required."]})
"""

from fastapi import HTTPException, status
from typing import Any

from shared.config.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# Persistence layer
# =============================================================================


class StoreError(Exception):
    """Base class for errors raised by the entity store."""


class InvalidSortFieldError(StoreError):
    """The requested sort field is not sortable for this entity."""

    def __init__(self, entity: str, field: str, allowed: list[str] | None = None):
        self.entity = entity
        self.field = field
        self.allowed = allowed or []
        message = f"Field '{field}' is not sortable for {entity}"
        if self.allowed:
            message += f" (allowed: {', '.join(self.allowed)})"
        super().__init__(message)


# =============================================================================
# API boundary
# =============================================================================


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All boundary exceptions inherit from this class
    to ensure consistent logging and response format.
    """

    title: str = "Error"

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


class ValidationError(AppException):
    """
    Input validation error (400).

    Carries the field-keyed list of messages rendered in the
    problem details "errors" member.

    Usage:
        raise ValidationError(errors={"price": ["The price field must be zero or greater."]})
    """

    title = "Validation Error"
    DEFAULT_DETAIL = "One or more validation errors occurred."

    def __init__(
        self,
        detail: str | None = None,
        errors: dict[str, list[str]] | None = None,
        **log_context: Any,
    ):
        self.errors = errors or {}
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail or self.DEFAULT_DETAIL,
            log_level="warning",
            fields=sorted(self.errors),
            **log_context,
        )
