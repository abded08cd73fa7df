"""
Caching layer for pyvalidation.

Modules:
    models: CacheEntry and CacheStats
    keys: Cache key derivation
    statistics: Request counters
    backends: Bounded LRU/TTL in-memory store
    validation_cache: Validator result cache
    regex_cache: Compiled pattern cache
    metadata: Per-class metadata records
    manager: CacheManager, with_cache and the default-manager helpers
"""

from .backends import CacheBackend, MemoryCache
from .keys import ValueKind, classify_value, derive_key, serialize_value
from .manager import (
    CacheManager,
    cached,
    clear_all_caches,
    configure_caches,
    get_all_cache_stats,
    get_cache_manager,
    get_performance_monitor,
    get_regex_cache,
    get_validation_cache,
    set_cache_manager,
    warmup_caches,
    with_cache,
)
from .metadata import MetadataCache
from .models import CacheEntry, CacheStats
from .regex_cache import PatternSpec, RegexCache
from .statistics import CacheStatistics
from .validation_cache import ValidationCache

__all__ = [
    "CacheBackend",
    "MemoryCache",
    "ValueKind",
    "classify_value",
    "derive_key",
    "serialize_value",
    "CacheManager",
    "cached",
    "clear_all_caches",
    "configure_caches",
    "get_all_cache_stats",
    "get_cache_manager",
    "get_performance_monitor",
    "get_regex_cache",
    "get_validation_cache",
    "set_cache_manager",
    "warmup_caches",
    "with_cache",
    "MetadataCache",
    "CacheEntry",
    "CacheStats",
    "PatternSpec",
    "RegexCache",
    "CacheStatistics",
    "ValidationCache",
]
