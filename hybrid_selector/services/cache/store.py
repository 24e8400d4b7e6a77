"""
Cache store backends.

CacheStore is the swappable persistence seam behind the intelligent cache.
InMemoryCacheStore keeps entries in a TTL + LRU bounded map; an external
key-value backend only needs to implement the same async interface.
"""

import asyncio
import logging
from abc import ABC, abstractmethod

from cachetools import TTLCache  # type: ignore[import-untyped]

from hybrid_selector.services.cache.types import CachedStrategy

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 3600
DEFAULT_MAX_ENTRIES = 1000


class CacheStore(ABC):
    """Interface for cached strategy storage."""

    @abstractmethod
    async def get(self, key: str) -> CachedStrategy | None:
        """Retrieve the live entry for a key."""

    @abstractmethod
    async def put(self, entry: CachedStrategy) -> bool:
        """
        Store an entry under its key.

        Concurrent writes to the same key are last-write-wins by
        ``created_at``: an entry older than the stored one is rejected.

        Returns:
            True if the entry was stored
        """

    @abstractmethod
    async def evict(self, key: str) -> None:
        """Remove the entry for a key, if any."""

    @abstractmethod
    async def entries(self, course_id: str | None = None) -> list[CachedStrategy]:
        """List live entries, optionally for one course."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every entry."""

    @abstractmethod
    async def size(self) -> int:
        """Number of live entries."""


class InMemoryCacheStore(CacheStore):
    """
    Process-local store backed by ``cachetools.TTLCache``.

    Entries expire after ``ttl_seconds``; when ``max_entries`` is reached the
    least recently used entry is evicted.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        self._cache: TTLCache[str, CachedStrategy] = TTLCache(maxsize=max_entries, ttl=ttl_seconds)
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> CachedStrategy | None:
        async with self._lock:
            entry: CachedStrategy | None = self._cache.get(key)
            return entry

    async def put(self, entry: CachedStrategy) -> bool:
        async with self._lock:
            existing: CachedStrategy | None = self._cache.get(entry.key)
            if existing is not None and existing.created_at > entry.created_at:
                logger.debug(f"Rejected stale write for {entry.key}")
                return False
            self._cache[entry.key] = entry
            return True

    async def evict(self, key: str) -> None:
        async with self._lock:
            self._cache.pop(key, None)

    async def entries(self, course_id: str | None = None) -> list[CachedStrategy]:
        async with self._lock:
            self._cache.expire()
            values: list[CachedStrategy] = list(self._cache.values())
        if course_id is None:
            return values
        return [e for e in values if e.course_id == course_id]

    async def clear(self) -> None:
        async with self._lock:
            self._cache.clear()

    async def size(self) -> int:
        async with self._lock:
            self._cache.expire()
            return len(self._cache)
