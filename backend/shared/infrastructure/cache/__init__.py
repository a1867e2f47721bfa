"""
Cache package initialization.

In-process cache shared by the CRUD services.
"""

from shared.infrastructure.cache.memory import (
    CacheEntry,
    CacheService,
    MemoryCacheService,
)

__all__ = [
    "CacheEntry",
    "CacheService",
    "MemoryCacheService",
]
