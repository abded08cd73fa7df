"""
Cache data models for pyvalidation.

This module contains the core data structures used by the caching system:
the private entry record held inside a cache and the read-only statistics
snapshot handed to callers.

Classes:
    CacheEntry: A cached value with timing metadata
    CacheStats: Snapshot of cache size and request counters

Features:
    - Absolute expiry timestamps checked against an injectable clock
    - Access pattern tracking
    - Derived request totals and hit rate
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    """A cached value with metadata. Never handed out by the caches."""

    key: str
    value: V
    created_at: float
    last_accessed: float
    ttl: float  # Time to live in seconds, <= 0 means no expiration
    access_count: int = 0

    @property
    def expires_at(self) -> float | None:
        if self.ttl <= 0:
            return None
        return self.created_at + self.ttl

    def is_expired(self, now: float) -> bool:
        """Check if the entry has expired at ``now``."""
        expires_at = self.expires_at
        if expires_at is None:
            return False
        return now > expires_at

    def touch(self, now: float, refresh_ttl: bool = False) -> None:
        """
        Update last accessed time and increment access count.

        With ``refresh_ttl`` the expiry window restarts at ``now``.
        """
        self.last_accessed = now
        self.access_count += 1
        if refresh_ttl:
            self.created_at = now


@dataclass(frozen=True)
class CacheStats:
    """Cache statistics snapshot, computed on demand."""

    size: int = 0
    capacity: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Hit rate as a percentage (0.0 to 100.0)."""
        total = self.total_requests
        return (self.hits / total) * 100.0 if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "capacity": self.capacity,
            "hits": self.hits,
            "misses": self.misses,
            "total_requests": self.total_requests,
            "hit_rate": self.hit_rate,
            "evictions": self.evictions,
            "expirations": self.expirations,
        }
