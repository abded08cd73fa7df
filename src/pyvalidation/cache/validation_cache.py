"""
Validation result cache.

Memoizes the boolean outcome of a validator for a given value and argument
list. Lookups are keyed by :func:`pyvalidation.cache.keys.derive_key`.

Classes:
    ValidationCache: Bounded LRU/TTL cache of validator results

Behaviour:
    - ``get`` counts a hit or a miss; ``has`` is a non-counting peek that does
      not change recency
    - With ``update_age_on_get`` (the default) every hit restarts the entry's
      TTL, so a key that keeps being read does not expire
    - ``clear`` drops entries and zeroes the counters

Example:
    >>> cache = ValidationCache(max_size=100, ttl=60)
    >>> cache.set("IsMobile", "13812345678", True)
    >>> cache.get("IsMobile", "13812345678")
    True
    >>> cache.get("IsMobile", "13900000000") is None
    True
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .backends import MemoryCache
from .keys import derive_key
from .models import CacheStats

DEFAULT_VALIDATION_CACHE_SIZE = 5000
DEFAULT_VALIDATION_CACHE_TTL = 600.0  # 10 minutes


class ValidationCache:
    """
    Bounded cache of validation results.

    Args:
        max_size: Maximum number of cached results
        ttl: Default TTL in seconds (<= 0 disables expiry)
        allow_stale: Hand back an expired result once, as a miss, before dropping it
        update_age_on_get: Restart the TTL of an entry on every hit
        clock: Monotonic time source in seconds
    """

    def __init__(
        self,
        max_size: int = DEFAULT_VALIDATION_CACHE_SIZE,
        ttl: float = DEFAULT_VALIDATION_CACHE_TTL,
        allow_stale: bool = False,
        update_age_on_get: bool = True,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._store: MemoryCache[bool] = MemoryCache(
            max_size=max_size,
            default_ttl=ttl,
            allow_stale=allow_stale,
            update_age_on_get=update_age_on_get,
            clock=clock,
        )

    @property
    def max_size(self) -> int:
        return self._store.max_size

    @property
    def ttl(self) -> float:
        return self._store.default_ttl

    @property
    def allow_stale(self) -> bool:
        return self._store.allow_stale

    @property
    def update_age_on_get(self) -> bool:
        return self._store.update_age_on_get

    def get(self, validator_name: str, value: Any, *extra_args: Any) -> bool | None:
        """Return the cached result, or ``None`` when absent or expired."""
        return self.lookup(derive_key(validator_name, value, extra_args))

    def set(
        self,
        validator_name: str,
        value: Any,
        result: bool,
        *extra_args: Any,
        ttl: float | None = None,
    ) -> None:
        """Cache ``result`` as the most recently used entry."""
        self.store(derive_key(validator_name, value, extra_args), result, ttl=ttl)

    def has(self, validator_name: str, value: Any, *extra_args: Any) -> bool:
        """Whether an unexpired result is cached. Does not count or reorder."""
        key = derive_key(validator_name, value, extra_args)
        return self._store.peek(key) is not None

    def delete(self, validator_name: str, value: Any, *extra_args: Any) -> bool:
        """Remove one cached result; return whether anything was removed."""
        return self._store.delete(derive_key(validator_name, value, extra_args))

    def set_ttl(self, validator_name: str, value: Any, ttl: float, *extra_args: Any) -> None:
        """
        Give an existing entry a new TTL, starting now.

        Does nothing if the entry is absent or already expired.
        """
        key = derive_key(validator_name, value, extra_args)
        current = self._store.peek(key)
        if current is not None:
            self._store.set(key, current, ttl=ttl)

    def lookup(self, key: str) -> bool | None:
        """Counting lookup by an already derived key."""
        return self._store.get(key)

    def store(self, key: str, result: bool, ttl: float | None = None) -> None:
        """Store under an already derived key."""
        self._store.set(key, bool(result), ttl=ttl)

    def clear(self) -> None:
        """Remove all entries and reset the counters."""
        self._store.clear()

    def purge_expired(self) -> int:
        return self._store.purge_expired()

    def keys(self) -> list[str]:
        return self._store.keys()

    def get_stats(self) -> CacheStats:
        return self._store.get_stats()

    def __len__(self) -> int:
        return len(self._store)
