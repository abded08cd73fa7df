"""
Cache management and the caching combinator.

:class:`CacheManager` is the context object that owns one validation result
cache, one regex cache, one performance monitor and one metadata cache.
Code that needs caching can be handed a manager explicitly; code that does
not care uses the process-wide default returned by :func:`get_cache_manager`.

Classes:
    CacheManager: Owner of the caches and the monitor

Functions:
    with_cache: Wrap any ``(value, *args) -> bool`` predicate with result caching
    cached: Decorator form of ``with_cache``
    get_cache_manager / set_cache_manager: Access the default manager
    configure_caches: Rebuild the default manager's caches with new settings
    warmup_caches: Precompile the locale patterns
    clear_all_caches: Clear both caches and the monitor
    get_all_cache_stats: Nested statistics for tooling

Behaviour:
    - Reconfiguration builds fresh cache instances; entries and counters of
      the previous instance are discarded
    - A wrapped predicate that raises propagates the exception and caches
      nothing
    - A value that cannot be turned into a cache key is validated without
      the cache, so callers see the same result either way

Example:
    >>> from pyvalidation.cache.manager import with_cache, get_all_cache_stats
    >>> is_even = with_cache("IsEven", lambda v: v % 2 == 0)
    >>> is_even(4), is_even(4)
    (True, True)
    >>> get_all_cache_stats()["validation"]["hits"]
    1
"""

from __future__ import annotations

import copy
import dataclasses
import functools
import threading
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

from ..core.config import CacheConfig, RegexCacheOptions, ValidationCacheOptions
from ..utils.error_handling import ErrorCollector, SerializationError
from ..utils.logging_config import get_logger
from ..utils.performance_monitoring import PerformanceMonitor
from .keys import derive_key
from .metadata import MetadataCache
from .regex_cache import PatternSpec, RegexCache
from .validation_cache import ValidationCache

F = TypeVar("F", bound=Callable[..., Any])

ValidationOptionsLike = ValidationCacheOptions | Mapping[str, Any]
RegexOptionsLike = RegexCacheOptions | Mapping[str, Any]


def _copy_options(options: Any) -> Any:
    return dataclasses.replace(options) if options is not None else None


class CacheManager:
    """
    Owns the caches used by validators.

    Args:
        config: Initial cache settings
        clock: Time source in seconds for cache expiry (``time.monotonic`` by default)
        monitor_clock: Time source in seconds for the performance monitor
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        clock: Callable[[], float] | None = None,
        monitor_clock: Callable[[], float] | None = None,
    ) -> None:
        self.config = copy.deepcopy(config) if config is not None else CacheConfig()
        self._clock = clock
        self._lock = threading.RLock()
        self.logger = get_logger()

        self.validation_cache = self._build_validation_cache(self.config.validation)
        self.regex_cache = self._build_regex_cache(self.config.regex)
        self.performance_monitor = PerformanceMonitor(clock=monitor_clock)
        self.metadata_cache = MetadataCache()

    def _build_validation_cache(self, options: ValidationCacheOptions) -> ValidationCache:
        return ValidationCache(
            max_size=options.max_size,
            ttl=options.ttl,
            allow_stale=options.allow_stale,
            update_age_on_get=options.update_age_on_get,
            clock=self._clock,
        )

    def _build_regex_cache(self, options: RegexCacheOptions) -> RegexCache:
        return RegexCache(max_size=options.max_size, ttl=options.ttl, clock=self._clock)

    def reconfigure(
        self,
        validation: ValidationOptionsLike | None = None,
        regex: RegexOptionsLike | None = None,
    ) -> None:
        """
        Replace the named caches with fresh instances built from new settings.

        Mappings are read with ``from_dict`` (TTL in seconds). Caches that are
        not named keep their entries.

        Raises:
            ConfigurationError: If the new settings are invalid
        """
        validation_options = (
            ValidationCacheOptions.from_dict(validation)
            if isinstance(validation, Mapping)
            else _copy_options(validation)
        )
        regex_options = (
            RegexCacheOptions.from_dict(regex) if isinstance(regex, Mapping) else _copy_options(regex)
        )

        with self._lock:
            if validation_options is not None:
                self.validation_cache = self._build_validation_cache(validation_options)
                self.config.validation = validation_options
                self.logger.log_cache_configured(
                    "validation", validation_options.max_size, validation_options.ttl
                )
            if regex_options is not None:
                self.regex_cache = self._build_regex_cache(regex_options)
                self.config.regex = regex_options
                self.logger.log_cache_configured("regex", regex_options.max_size, regex_options.ttl)

    def warmup(
        self, patterns: Iterable[PatternSpec | Mapping[str, Any] | str] | None = None
    ) -> ErrorCollector:
        """
        Precompile ``patterns`` (the locale validator patterns by default).

        Never raises for bad patterns; failures are returned in the collector.
        """
        if patterns is None:
            from ..validators.patterns import WARMUP_PATTERNS

            patterns = WARMUP_PATTERNS
        collector = ErrorCollector()
        self.regex_cache.precompile(patterns, error_collector=collector)
        return collector

    def clear_all(self) -> None:
        """Clear the result cache, the regex cache and the monitor."""
        with self._lock:
            self.validation_cache.clear()
            self.regex_cache.clear()
            self.performance_monitor.clear()
        self.logger.debug("All caches cleared", operation="clear_all")

    def get_all_stats(self, hotspot_limit: int = 10) -> dict[str, Any]:
        return {
            "validation": self.validation_cache.get_stats().to_dict(),
            "regex": self.regex_cache.get_stats().to_dict(),
            "performance": self.performance_monitor.get_report(),
            "hotspots": self.performance_monitor.get_hotspots(hotspot_limit),
        }

    def call_cached(
        self,
        validator_name: str,
        predicate: Callable[..., Any],
        value: Any,
        args: Sequence[Any] = (),
        ttl: float | None = None,
    ) -> bool:
        """Run ``predicate(value, *args)`` through the result cache."""
        try:
            key = derive_key(validator_name, value, args)
        except SerializationError as exc:
            self.logger.debug(
                f"Cache bypassed for {validator_name}: {exc.message}",
                operation="cache_bypass",
                validator=validator_name,
            )
            with self.performance_monitor.track(validator_name):
                return bool(predicate(value, *args))

        cache = self.validation_cache
        cached_result = cache.lookup(key)
        if cached_result is not None:
            return cached_result

        stop = self.performance_monitor.start_timer(validator_name)
        try:
            result = bool(predicate(value, *args))
        finally:
            stop()
        cache.store(key, result, ttl=ttl)
        return result

    def __enter__(self) -> CacheManager:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.clear_all()


_default_manager: CacheManager | None = None
_default_lock = threading.Lock()


def get_cache_manager() -> CacheManager:
    """Get the process-wide default manager, creating it on first use."""
    global _default_manager
    if _default_manager is None:
        with _default_lock:
            if _default_manager is None:
                _default_manager = CacheManager()
    return _default_manager


def set_cache_manager(manager: CacheManager | None) -> CacheManager | None:
    """
    Install ``manager`` as the default and return the previous one.

    Passing ``None`` makes the next :func:`get_cache_manager` call build a
    fresh manager.
    """
    global _default_manager
    with _default_lock:
        previous, _default_manager = _default_manager, manager
    return previous


def get_validation_cache() -> ValidationCache:
    return get_cache_manager().validation_cache


def get_regex_cache() -> RegexCache:
    return get_cache_manager().regex_cache


def get_performance_monitor() -> PerformanceMonitor:
    return get_cache_manager().performance_monitor


def configure_caches(
    validation: ValidationOptionsLike | None = None,
    regex: RegexOptionsLike | None = None,
) -> None:
    """Rebuild the default manager's caches; see :meth:`CacheManager.reconfigure`."""
    get_cache_manager().reconfigure(validation=validation, regex=regex)


def warmup_caches() -> ErrorCollector:
    """Precompile the locale patterns into the default regex cache."""
    return get_cache_manager().warmup()


def clear_all_caches() -> None:
    get_cache_manager().clear_all()


def get_all_cache_stats() -> dict[str, Any]:
    """``{"validation", "regex", "performance", "hotspots"}`` for the default manager."""
    return get_cache_manager().get_all_stats()


def with_cache(
    validator_name: str,
    predicate: Callable[..., Any],
    ttl: float | None = None,
    manager: CacheManager | None = None,
) -> Callable[..., bool]:
    """
    Wrap ``predicate`` so its results are cached under ``validator_name``.

    Without an explicit ``manager`` the default manager is looked up on each
    call, so :func:`configure_caches` and :func:`set_cache_manager` apply to
    predicates wrapped earlier.
    """
    if not validator_name:
        raise ValueError("validator_name must be a non-empty string")

    @functools.wraps(predicate)
    def wrapper(value: Any, *args: Any) -> bool:
        target = manager if manager is not None else get_cache_manager()
        return target.call_cached(validator_name, predicate, value, args, ttl=ttl)

    wrapper.validator_name = validator_name  # type: ignore[attr-defined]
    wrapper.uncached = predicate  # type: ignore[attr-defined]
    return wrapper


def cached(validator_name: str | None = None, ttl: float | None = None) -> Callable[[F], F]:
    """Decorator form of :func:`with_cache`; the name defaults to the function name."""

    def decorator(func: F) -> F:
        return with_cache(validator_name or func.__name__, func, ttl=ttl)  # type: ignore[return-value]

    return decorator
