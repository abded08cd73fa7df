"""
Cache backend implementations for pyvalidation.

This module provides the bounded in-memory store shared by the validation
result cache and the regex compilation cache.

Classes:
    CacheBackend: Abstract base class for cache backends
    MemoryCache: In-memory cache with LRU eviction and per-entry TTL

Features:
    - Strict LRU eviction, where both reads and writes count as use
    - Per-entry TTL with lazy expiry on access
    - Optional sliding expiration ("update age on get")
    - Optional one-shot return of stale values
    - Hit/miss/eviction accounting
    - Thread-safe operations
"""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from collections.abc import Callable
from typing import Generic, TypeVar

from .models import CacheEntry, CacheStats
from .statistics import CacheStatistics

V = TypeVar("V")


class CacheBackend(ABC, Generic[V]):
    """Abstract base class for cache backends."""

    @abstractmethod
    def get(self, key: str, default: V | None = None) -> V | None:
        """Get a cached value by key, counting the request."""

    @abstractmethod
    def peek(self, key: str, default: V | None = None) -> V | None:
        """Get a cached value without counting or reordering."""

    @abstractmethod
    def set(self, key: str, value: V, ttl: float | None = None) -> None:
        """Set a cached value."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a cache entry."""

    @abstractmethod
    def clear(self) -> None:
        """Clear all cache entries."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Get all cache keys, least recently used first."""

    @abstractmethod
    def size(self) -> int:
        """Get the number of cache entries."""

    @abstractmethod
    def get_stats(self) -> CacheStats:
        """Get a statistics snapshot."""


class MemoryCache(CacheBackend[V]):
    """
    In-memory cache with LRU eviction and TTL expiry.

    Entries live in an ``OrderedDict`` kept in recency order (least recently
    used first). ``max_size`` is a hard bound: after every ``set`` the cache
    holds at most ``max_size`` entries. Expired entries are never returned as
    hits; they are dropped when they are next looked at or by
    :meth:`purge_expired`.

    Args:
        max_size: Maximum number of entries, at least 1
        default_ttl: TTL in seconds for entries stored without one (<= 0 disables expiry)
        allow_stale: Return an expired value once (counted as a miss) before dropping it
        update_age_on_get: Restart an entry's TTL window on every hit
        clock: Monotonic time source in seconds
    """

    def __init__(
        self,
        max_size: int = 1000,
        default_ttl: float = 0.0,
        allow_stale: bool = False,
        update_age_on_get: bool = False,
        clock: Callable[[], float] | None = None,
    ):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.default_ttl = default_ttl
        self.allow_stale = allow_stale
        self.update_age_on_get = update_age_on_get
        self._clock = clock or time.monotonic
        self._cache: OrderedDict[str, CacheEntry[V]] = OrderedDict()
        self._lock = threading.RLock()
        self.statistics = CacheStatistics()

    def get(self, key: str, default: V | None = None) -> V | None:
        """Get a cached value by key."""
        with self._lock:
            now = self._clock()
            entry = self._cache.get(key)
            if entry is None:
                self.statistics.record_miss()
                return default

            if entry.is_expired(now):
                del self._cache[key]
                self.statistics.record_expiration()
                self.statistics.record_miss()
                return entry.value if self.allow_stale else default

            # Move to end (most recently used)
            self._cache.move_to_end(key)
            entry.touch(now, refresh_ttl=self.update_age_on_get)
            self.statistics.record_hit()
            return entry.value

    def peek(self, key: str, default: V | None = None) -> V | None:
        """Get a cached value without touching recency or counters."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return default
            if entry.is_expired(self._clock()):
                del self._cache[key]
                self.statistics.record_expiration()
                return default
            return entry.value

    def set(self, key: str, value: V, ttl: float | None = None) -> None:
        """Insert or overwrite ``key`` as the most recently used entry."""
        with self._lock:
            now = self._clock()
            self._cache.pop(key, None)
            self._cache[key] = CacheEntry(
                key=key,
                value=value,
                created_at=now,
                last_accessed=now,
                ttl=self.default_ttl if ttl is None else ttl,
            )
            self._evict_entries()

    def delete(self, key: str) -> bool:
        """Delete a cache entry."""
        with self._lock:
            return self._cache.pop(key, None) is not None

    def clear(self) -> None:
        """Clear all cache entries and reset the counters."""
        with self._lock:
            self._cache.clear()
            self.statistics.reset_stats()

    def keys(self) -> list[str]:
        """Get all cache keys, least recently used first."""
        with self._lock:
            return list(self._cache.keys())

    def size(self) -> int:
        """Get the number of cache entries."""
        return len(self._cache)

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were dropped."""
        with self._lock:
            now = self._clock()
            expired = [k for k, entry in self._cache.items() if entry.is_expired(now)]
            for key in expired:
                del self._cache[key]
            if expired:
                self.statistics.record_expiration(len(expired))
            return len(expired)

    def get_stats(self) -> CacheStats:
        with self._lock:
            return self.statistics.snapshot(size=len(self._cache), capacity=self.max_size)

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.peek(key) is not None

    def _evict_entries(self) -> None:
        """Evict least recently used entries until within ``max_size``."""
        evicted = 0
        while len(self._cache) > self.max_size:
            # Remove least recently used (first item)
            self._cache.popitem(last=False)
            evicted += 1
        if evicted:
            self.statistics.record_eviction(evicted)
