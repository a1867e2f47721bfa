"""
Infrastructure module: Database and cache.

Provides:
- Database sessions and transactions (db.py)
- In-process cache (cache/)
- Request correlation IDs (correlation.py)
"""

from shared.infrastructure.db import (
    engine,
    SessionLocal,
    get_db,
    get_db_context,
    safe_commit,
)
from shared.infrastructure.cache import (
    CacheService,
    MemoryCacheService,
)

__all__ = [
    # db
    "engine",
    "SessionLocal",
    "get_db",
    "get_db_context",
    "safe_commit",
    # cache
    "CacheService",
    "MemoryCacheService",
]
