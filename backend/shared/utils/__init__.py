"""
Utilities module: Exceptions.
"""

from shared.utils.exceptions import (
    AppException,
    InvalidSortFieldError,
    StoreError,
    ValidationError,
)

__all__ = [
    "AppException",
    "InvalidSortFieldError",
    "StoreError",
    "ValidationError",
]
