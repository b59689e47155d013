from __future__ import annotations

import time

from .logging import log_cache_event
from .rwlock import ReadWriteLock
from .types import CacheEntry, CacheKey, Clock


class MemoryCache:
    """Bounded in-memory cache with lazy time-based expiry.

    Entries are never swept in the background: a stale entry keeps its slot until it
    is read, overwritten or evicted. When a new key arrives at capacity the entry
    with the oldest ``stored_at`` is evicted (ties go to the smallest key).
    """

    def __init__(
        self,
        *,
        ttl_seconds: float,
        max_entries: int,
        namespace: str = "icons",
        clock: Clock = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        if max_entries <= 0:
            raise ValueError("max_entries must be > 0")
        self._ttl = float(ttl_seconds)
        self._max_entries = max_entries
        self._namespace = namespace
        self._clock = clock
        self._lock = ReadWriteLock()
        self._entries: dict[CacheKey, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def get(self, key: CacheKey) -> bytes | None:
        now = self._clock()
        with self._lock.read():
            entry = self._entries.get(key)

        if entry is None:
            log_cache_event(namespace=self._namespace, cache_event="miss")
            return None
        if entry.age(now) <= self._ttl:
            log_cache_event(namespace=self._namespace, cache_event="hit")
            return entry.content

        with self._lock.write():
            # A concurrent set may have refreshed the slot since we looked.
            if self._entries.get(key) is entry:
                del self._entries[key]
        log_cache_event(namespace=self._namespace, cache_event="evict", reason="expired")
        log_cache_event(namespace=self._namespace, cache_event="miss")
        return None

    def set(self, key: CacheKey, content: bytes) -> None:
        evicted = False
        with self._lock.write():
            if key not in self._entries and len(self._entries) >= self._max_entries:
                evicted = self._evict_oldest_locked()
            self._entries[key] = CacheEntry(content=bytes(content), stored_at=self._clock())

        log_cache_event(namespace=self._namespace, cache_event="set", size=len(content))
        if evicted:
            log_cache_event(namespace=self._namespace, cache_event="evict", reason="capacity")

    def delete(self, key: CacheKey) -> None:
        with self._lock.write():
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock.write():
            self._entries.clear()

    def _evict_oldest_locked(self) -> bool:
        if not self._entries:
            return False
        oldest_key, _ = min(
            self._entries.items(),
            key=lambda item: (item[1].stored_at, item[0]),
        )
        del self._entries[oldest_key]
        return True
