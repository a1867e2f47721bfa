"""
In-process cache for CRUD read results.

Entries carry two expirations:
- sliding: the entry dies after this many seconds without being read
- absolute: the entry dies this many seconds after it was written, however
  often it is read

A caller-supplied ttl sets sliding = ttl and absolute = 2 * ttl.

Failures inside the cache never reach the caller: they are logged and the
operation degrades to a miss (or a no-op). Only a get_or_set factory's own
exception propagates.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from shared.config.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_SLIDING_SECONDS = 30 * 60
DEFAULT_ABSOLUTE_SECONDS = 60 * 60
DEFAULT_MAX_ENTRIES = 10_000


@runtime_checkable
class CacheService(Protocol):
    """Cache operations the CRUD services depend on."""

    @property
    def is_enabled(self) -> bool: ...

    def get_or_set(self, key: str, factory: Callable[[], T], ttl: float | None = None) -> T: ...

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, ttl: float | None = None) -> None: ...

    def remove(self, key: str) -> None: ...

    def remove_by_prefix(self, prefix: str) -> int: ...


@dataclass
class CacheEntry:
    """Single cache entry with its expiration policy."""

    value: Any
    sliding_seconds: float
    expires_at: float
    last_access: float = field(default_factory=time.monotonic)

    def is_expired(self, now: float) -> bool:
        """Check if this entry has expired (idle too long or past its cap)."""
        return now > self.expires_at or now - self.last_access > self.sliding_seconds


class MemoryCacheService:
    """
    Thread-safe key/value cache with sliding + absolute expiration.

    Features:
    - Sliding expiration reset on every read, bounded by an absolute cap
    - Lazy removal of expired entries
    - Size limit: expired entries are purged first, then the least
      recently read entry is evicted
    - Substring-based bulk invalidation (remove_by_prefix)

    Usage:
        cache = MemoryCacheService()
        result = cache.get_or_set("customer_1", lambda: load(1))
        cache.remove_by_prefix("customer_")
    """

    def __init__(
        self,
        enabled: bool = True,
        sliding_seconds: float = DEFAULT_SLIDING_SECONDS,
        absolute_seconds: float = DEFAULT_ABSOLUTE_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._enabled = enabled
        self._sliding = sliding_seconds
        self._absolute = absolute_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @classmethod
    def from_settings(cls, settings: Any) -> "MemoryCacheService":
        """Build a cache from the application settings."""
        return cls(
            enabled=settings.cache_enabled,
            sliding_seconds=settings.cache_sliding_expiration_seconds,
            absolute_seconds=settings.cache_absolute_expiration_seconds,
            max_entries=settings.cache_max_entries,
        )

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def size(self) -> int:
        """Current number of entries (expired ones included until purged)."""
        with self._lock:
            return len(self._entries)

    # =========================================================================
    # Public API
    # =========================================================================

    def get_or_set(self, key: str, factory: Callable[[], T], ttl: float | None = None) -> T:
        """
        Return the cached value for key, computing and storing it on a miss.

        The factory runs outside the lock. If storing the computed value
        fails, the failure is logged and the value is still returned.
        """
        found, value = self._lookup(key)
        if found:
            logger.debug("Cache hit", key=key)
            return value

        logger.debug("Cache miss", key=key)
        value = factory()

        try:
            self._store(key, value, ttl)
        except Exception as e:
            logger.warning("Failed to store cache entry", key=key, error=str(e))

        return value

    def get(self, key: str) -> Any | None:
        """Get the cached value for key, or None when absent or expired."""
        try:
            _, value = self._lookup(key)
            return value
        except Exception as e:
            logger.error("Failed to read cache entry", key=key, error=str(e))
            return None

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store value under key, replacing any previous entry."""
        try:
            self._store(key, value, ttl)
        except Exception as e:
            logger.error("Failed to store cache entry", key=key, error=str(e))

    def remove(self, key: str) -> None:
        """Remove a single entry. Removing a missing key is a no-op."""
        try:
            with self._lock:
                self._entries.pop(key, None)
        except Exception as e:
            logger.error("Failed to remove cache entry", key=key, error=str(e))

    def remove_by_prefix(self, prefix: str) -> int:
        """
        Remove every entry whose key contains prefix.

        Matching is by substring, not only at the start of the key, so a
        prefix that also appears inside another entity's keys removes
        those too.

        Returns:
            Number of entries removed.
        """
        try:
            with self._lock:
                keys_to_remove = [k for k in self._entries if prefix in k]
                for key in keys_to_remove:
                    del self._entries[key]
        except Exception as e:
            logger.error("Failed to remove cache entries", prefix=prefix, error=str(e))
            return 0

        if keys_to_remove:
            logger.debug("Cache entries removed", prefix=prefix, count=len(keys_to_remove))
        return len(keys_to_remove)

    def clear(self) -> int:
        """
        Clear all entries.

        Returns:
            Number of entries cleared.
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total = self._hits + self._misses
            return {
                "enabled": self._enabled,
                "size": len(self._entries),
                "max_entries": self._max_entries,
                "hits": self._hits,
                "misses": self._misses,
                "hit_ratio": round(self._hits / total, 3) if total else 0.0,
            }

    # =========================================================================
    # Internals (call with the lock released; they take it themselves)
    # =========================================================================

    def _lookup(self, key: str) -> tuple[bool, Any]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return False, None

            if entry.is_expired(now):
                del self._entries[key]
                self._misses += 1
                return False, None

            entry.last_access = now
            self._hits += 1
            return True, entry.value

    def _store(self, key: str, value: Any, ttl: float | None) -> None:
        if ttl is not None:
            sliding, absolute = ttl, ttl * 2
        else:
            sliding, absolute = self._sliding, self._absolute

        now = self._clock()
        with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_entries:
                self._cleanup_expired(now)
                if len(self._entries) >= self._max_entries:
                    self._evict_least_recent()

            self._entries[key] = CacheEntry(
                value=value,
                sliding_seconds=sliding,
                expires_at=now + absolute,
                last_access=now,
            )

    def _cleanup_expired(self, now: float) -> int:
        """Remove expired entries (must hold lock)."""
        keys_to_remove = [k for k, v in self._entries.items() if v.is_expired(now)]
        for key in keys_to_remove:
            del self._entries[key]
        return len(keys_to_remove)

    def _evict_least_recent(self) -> None:
        """Evict the least recently read entry (must hold lock)."""
        if not self._entries:
            return

        oldest_key = min(
            self._entries.keys(),
            key=lambda k: self._entries[k].last_access,
        )
        del self._entries[oldest_key]
        logger.debug("Cache entry evicted", key=oldest_key)
