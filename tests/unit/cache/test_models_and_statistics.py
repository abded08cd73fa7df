"""Tests for pyvalidation.cache.models, statistics and metadata modules."""

from __future__ import annotations

import pytest

from pyvalidation.cache.metadata import MetadataCache
from pyvalidation.cache.models import CacheEntry, CacheStats
from pyvalidation.cache.statistics import CacheStatistics


class TestCacheEntry:
    def test_expiry(self):
        entry = CacheEntry(key="k", value=True, created_at=100.0, last_accessed=100.0, ttl=10)
        assert entry.expires_at == 110.0
        assert entry.is_expired(110.0) is False
        assert entry.is_expired(110.1) is True

    def test_no_expiry(self):
        entry = CacheEntry(key="k", value=True, created_at=100.0, last_accessed=100.0, ttl=0)
        assert entry.expires_at is None
        assert entry.is_expired(10**12) is False

    def test_touch(self):
        entry = CacheEntry(key="k", value=True, created_at=100.0, last_accessed=100.0, ttl=10)
        entry.touch(105.0)
        assert entry.access_count == 1
        assert entry.last_accessed == 105.0
        assert entry.created_at == 100.0
        entry.touch(108.0, refresh_ttl=True)
        assert entry.expires_at == 118.0


class TestCacheStats:
    def test_derived_fields(self):
        stats = CacheStats(size=2, capacity=10, hits=3, misses=1)
        assert stats.total_requests == 4
        assert stats.hit_rate == pytest.approx(75.0)

    def test_hit_rate_without_requests(self):
        assert CacheStats().hit_rate == 0.0

    def test_to_dict(self):
        data = CacheStats(size=1, capacity=5, hits=1, misses=1, evictions=2).to_dict()
        assert data["size"] == 1
        assert data["capacity"] == 5
        assert data["total_requests"] == 2
        assert data["hit_rate"] == pytest.approx(50.0)
        assert data["evictions"] == 2


class TestCacheStatistics:
    """Tests for CacheStatistics class."""

    def test_records(self):
        stats = CacheStatistics()
        stats.record_hit()
        stats.record_hit()
        stats.record_miss()
        stats.record_eviction(3)
        stats.record_expiration()
        assert stats.hits == 2
        assert stats.misses == 1
        assert stats.evictions == 3
        assert stats.expirations == 1
        assert stats.snapshot(size=0, capacity=1).hit_rate == pytest.approx(200 / 3)

    def test_snapshot(self):
        stats = CacheStatistics()
        stats.record_miss()
        snapshot = stats.snapshot(size=4, capacity=8)
        assert snapshot == CacheStats(size=4, capacity=8, misses=1)

    def test_reset(self):
        stats = CacheStatistics()
        stats.record_hit()
        stats.reset_stats()
        assert stats.snapshot(size=0, capacity=1).total_requests == 0


class TestMetadataCache:
    """Tests for MetadataCache class."""

    def test_set_and_get(self):
        class Dto:
            pass

        cache = MetadataCache()
        assert cache.get_metadata(Dto, "rules") is None
        cache.set_metadata(Dto, "rules", {"a": 1})
        assert cache.get_metadata(Dto, "rules") == {"a": 1}
        assert cache.has_metadata(Dto, "rules")
        assert not cache.has_metadata(Dto, "other")
        assert len(cache) == 1

    def test_clear_class(self):
        class Dto:
            pass

        cache = MetadataCache()
        cache.set_metadata(Dto, "rules", 1)
        cache.clear_class_cache(Dto)
        assert not cache.has_metadata(Dto, "rules")

    def test_clear(self):
        class Dto:
            pass

        cache = MetadataCache()
        cache.get_class_cache(Dto)["x"] = 1
        cache.clear()
        assert len(cache) == 0
