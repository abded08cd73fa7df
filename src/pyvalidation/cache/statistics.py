"""
Cache statistics tracking.

Classes:
    CacheStatistics: Thread-safe hit/miss/eviction counters for one cache
"""

from __future__ import annotations

import threading
from .models import CacheStats


class CacheStatistics:
    """
    Manages the request counters of a single cache.

    The owning cache records events while it holds its own lock; this class
    keeps its own lock as well so counters can be read from other threads.
    """

    def __init__(self) -> None:
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self.expirations = 0
        self._stats_lock = threading.RLock()

    def record_hit(self) -> None:
        """Record a cache hit."""
        with self._stats_lock:
            self.hits += 1

    def record_miss(self) -> None:
        """Record a cache miss."""
        with self._stats_lock:
            self.misses += 1

    def record_eviction(self, count: int = 1) -> None:
        """
        Record capacity evictions.

        Args:
            count: Number of entries evicted
        """
        with self._stats_lock:
            self.evictions += count

    def record_expiration(self, count: int = 1) -> None:
        """
        Record entries dropped because their TTL passed.

        Args:
            count: Number of entries expired
        """
        with self._stats_lock:
            self.expirations += count

    def snapshot(self, size: int, capacity: int) -> CacheStats:
        """Freeze the counters together with the cache's current size."""
        with self._stats_lock:
            return CacheStats(
                size=size,
                capacity=capacity,
                hits=self.hits,
                misses=self.misses,
                evictions=self.evictions,
                expirations=self.expirations,
            )

    def reset_stats(self) -> None:
        """Reset all counters to zero."""
        with self._stats_lock:
            self.hits = 0
            self.misses = 0
            self.evictions = 0
            self.expirations = 0
