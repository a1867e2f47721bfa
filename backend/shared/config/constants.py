"""
Centralized constants for the backend application.
Avoid magic strings and repeated constants.

Usage:
    from shared.config.constants import Limits, SortOrder, CacheKeys

    page_size = min(page_size, Limits.MAX_PAGE_SIZE)
    key = CacheKeys.entity("customer", 42)
"""

from typing import Final


# =============================================================================
# Pagination / Sorting
# =============================================================================


class Limits:
    """Paging and input size limits."""

    DEFAULT_PAGE: Final[int] = 1
    DEFAULT_PAGE_SIZE: Final[int] = 10
    MAX_PAGE_SIZE: Final[int] = 100

    # Field lengths (match the column sizes in the models)
    NAME_MAX_LENGTH: Final[int] = 100
    PHONE_MAX_LENGTH: Final[int] = 45
    COMPANY_MAX_LENGTH: Final[int] = 100
    IMAGE_PATH_MAX_LENGTH: Final[int] = 255

    # Decoded product images above this size are rejected (5 MB)
    MAX_IMAGE_BYTES: Final[int] = 5 * 1024 * 1024


class SortOrder:
    """Sort direction constants."""

    ASC: Final[str] = "asc"
    DESC: Final[str] = "desc"

    ALL: Final[tuple[str, ...]] = (ASC, DESC)


DEFAULT_SORT_BY: Final[str] = "id"


# =============================================================================
# Cache keys
# =============================================================================


class CacheKeys:
    """
    Cache key builders.

    Every key for an entity type starts with "<entity>_" so a single
    prefix removal drops both the paged lists and the single lookups.
    """

    @staticmethod
    def prefix(entity_name: str) -> str:
        return f"{entity_name}_"

    @staticmethod
    def entity(entity_name: str, entity_id: int) -> str:
        return f"{entity_name}_{entity_id}"

    @staticmethod
    def paged(
        entity_name: str,
        page: int,
        page_size: int,
        sort_by: str,
        sort_order: str,
    ) -> str:
        return f"{entity_name}_paged_{page}_{page_size}_{sort_by}_{sort_order}"
