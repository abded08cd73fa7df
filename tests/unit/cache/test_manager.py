"""Tests for pyvalidation.cache.manager module."""

from __future__ import annotations

import threading

import pytest

from pyvalidation.cache.manager import (
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
from pyvalidation.core.config import CacheConfig, ValidationCacheOptions
from pyvalidation.utils.error_handling import ConfigurationError
from pyvalidation.validators.patterns import WARMUP_PATTERNS


class CountingPredicate:
    """Predicate that records how often it runs."""

    def __init__(self, func=None):
        self.calls = 0
        self.func = func or (lambda value, *args: bool(value))

    def __call__(self, value, *args):
        self.calls += 1
        return self.func(value, *args)


class TestDefaultManager:
    def test_singleton(self):
        assert get_cache_manager() is get_cache_manager()

    def test_accessors_use_default(self):
        mgr = get_cache_manager()
        assert get_validation_cache() is mgr.validation_cache
        assert get_regex_cache() is mgr.regex_cache
        assert get_performance_monitor() is mgr.performance_monitor

    def test_set_returns_previous(self):
        first = get_cache_manager()
        replacement = CacheManager()
        assert set_cache_manager(replacement) is first
        assert get_cache_manager() is replacement

    def test_reset_builds_fresh_manager(self):
        first = get_cache_manager()
        set_cache_manager(None)
        assert get_cache_manager() is not first


class TestWithCache:
    """Tests for the caching combinator."""

    def test_memoizes(self):
        predicate = CountingPredicate()
        wrapped = with_cache("IsTruthy", predicate)
        assert wrapped("x") is True
        assert wrapped("x") is True
        assert predicate.calls == 1
        stats = get_all_cache_stats()["validation"]
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_args_are_part_of_key(self):
        predicate = CountingPredicate(lambda value, bound: value > bound)
        wrapped = with_cache("Above", predicate)
        assert wrapped(5, 3) is True
        assert wrapped(5, 10) is False
        assert wrapped(5, 3) is True
        assert predicate.calls == 2

    def test_int_and_float_cached_separately(self):
        predicate = CountingPredicate(lambda value: isinstance(value, int))
        is_int = with_cache("IsInt", predicate)
        assert is_int(5) is True
        assert is_int(5.0) is False
        assert is_int(5) is True
        assert predicate.calls == 2

    def test_result_is_bool(self):
        wrapped = with_cache("Len", lambda value: len(value))
        assert wrapped("abc") is True
        assert wrapped("") is False

    def test_exception_propagates_and_is_not_cached(self):
        predicate = CountingPredicate(lambda value: 1 / 0)
        wrapped = with_cache("Broken", predicate)
        with pytest.raises(ZeroDivisionError):
            wrapped("x")
        with pytest.raises(ZeroDivisionError):
            wrapped("x")
        assert predicate.calls == 2
        assert len(get_validation_cache()) == 0

    def test_exception_is_still_timed(self):
        wrapped = with_cache("Broken", lambda value: 1 / 0)
        with pytest.raises(ZeroDivisionError):
            wrapped("x")
        assert get_performance_monitor().get_metric("Broken").count == 1

    def test_unserializable_value_bypasses_cache(self):
        cyclic: list = []
        cyclic.append(cyclic)
        predicate = CountingPredicate(lambda value: len(value) == 1)
        wrapped = with_cache("SingleItem", predicate)
        assert wrapped(cyclic) is True
        assert wrapped(cyclic) is True
        assert predicate.calls == 2
        assert len(get_validation_cache()) == 0

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            with_cache("", lambda value: True)

    def test_attributes(self):
        def is_even(value):
            return value % 2 == 0

        wrapped = with_cache("IsEven", is_even)
        assert wrapped.validator_name == "IsEven"
        assert wrapped.uncached is is_even
        assert wrapped.__name__ == "is_even"

    def test_explicit_manager(self):
        own = CacheManager()
        wrapped = with_cache("IsTruthy", lambda value: bool(value), manager=own)
        wrapped(1)
        assert len(own.validation_cache) == 1
        assert len(get_validation_cache()) == 0

    def test_per_wrapper_ttl(self, manager, fake_clock):
        predicate = CountingPredicate()
        wrapped = with_cache("Short", predicate, ttl=1)
        wrapped("x")
        fake_clock.advance(2)
        wrapped("x")
        assert predicate.calls == 2

    def test_hits_are_not_timed(self):
        wrapped = with_cache("IsTruthy", lambda value: bool(value))
        for _ in range(5):
            wrapped("x")
        assert get_performance_monitor().get_metric("IsTruthy").count == 1

    def test_timing_uses_monitor_clock(self, stepping_clock):
        mgr = CacheManager(monitor_clock=stepping_clock(0.005))
        wrapped = with_cache("Slow", lambda value: True, manager=mgr)
        wrapped("x")
        metric = mgr.performance_monitor.get_metric("Slow")
        assert metric.avg_time == pytest.approx(5.0)

    def test_follows_default_manager_replacement(self):
        wrapped = with_cache("IsTruthy", lambda value: bool(value))
        wrapped("x")
        replacement = CacheManager()
        set_cache_manager(replacement)
        wrapped("x")
        assert replacement.validation_cache.get_stats().misses == 1

    def test_concurrent_calls_stay_bounded(self):
        configure_caches(validation={"max_size": 50})
        wrapped = with_cache("IsEven", lambda value: value % 2 == 0)

        def worker(offset):
            for i in range(200):
                assert wrapped(offset + i) is ((offset + i) % 2 == 0)

        threads = [threading.Thread(target=worker, args=(n * 1000,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(get_validation_cache()) <= 50


class TestCachedDecorator:
    def test_name_defaults_to_function_name(self):
        @cached()
        def is_positive(value):
            return value > 0

        assert is_positive.validator_name == "is_positive"
        assert is_positive(3) is True

    def test_explicit_name(self):
        @cached("IsPositive")
        def check(value):
            return value > 0

        check(1)
        assert get_validation_cache().has("IsPositive", 1)


class TestConfigureCaches:
    def test_reconfigure_validation(self):
        get_validation_cache().set("IsMobile", "a", True)
        configure_caches(validation={"max_size": 2, "ttl": 5})
        cache = get_validation_cache()
        assert cache.max_size == 2
        assert cache.ttl == 5
        assert len(cache) == 0
        assert get_cache_manager().config.validation.max_size == 2

    def test_reconfigure_with_options_object(self):
        configure_caches(validation=ValidationCacheOptions(max_size=7))
        assert get_validation_cache().max_size == 7

    def test_reconfigure_regex_only_keeps_results(self):
        get_validation_cache().set("IsMobile", "a", True)
        old_regex = get_regex_cache()
        configure_caches(regex={"max_size": 10})
        assert get_regex_cache() is not old_regex
        assert get_regex_cache().max_size == 10
        assert get_validation_cache().has("IsMobile", "a")

    def test_invalid_settings_leave_caches_untouched(self):
        cache = get_validation_cache()
        with pytest.raises(ConfigurationError):
            configure_caches(validation={"max_size": 0})
        with pytest.raises(ConfigurationError):
            configure_caches(validation={"bogus": 1})
        assert get_validation_cache() is cache

    def test_counters_restart(self):
        wrapped = with_cache("IsTruthy", lambda value: bool(value))
        wrapped("x")
        wrapped("x")
        configure_caches(validation={"max_size": 100})
        stats = get_all_cache_stats()["validation"]
        assert stats["hits"] == 0
        assert stats["misses"] == 0

    def test_caller_config_is_not_modified(self):
        config = CacheConfig()
        options = ValidationCacheOptions(max_size=9)
        mgr = CacheManager(config)
        mgr.reconfigure(validation=options, regex={"max_size": 4})
        assert config.validation.max_size == 5000
        assert config.regex.max_size == 200
        options.max_size = 1
        assert mgr.config.validation.max_size == 9
        assert mgr.config is not config

    def test_manager_from_config(self):
        mgr = CacheManager(CacheConfig.from_dict({"validation": {"max_size": 3}}))
        assert mgr.validation_cache.max_size == 3


class TestWarmupAndStats:
    def test_warmup_compiles_locale_patterns(self):
        collector = warmup_caches()
        assert collector.errors == []
        regex_stats = get_all_cache_stats()["regex"]
        assert regex_stats["size"] == len(set(WARMUP_PATTERNS))
        assert regex_stats["hits"] == 0
        assert regex_stats["misses"] == 0

    def test_warmup_collects_failures(self):
        collector = get_cache_manager().warmup(["^ok$", "(bad"])
        assert len(collector.errors) == 1
        assert get_regex_cache().has("^ok$")

    def test_clear_all(self):
        wrapped = with_cache("IsTruthy", lambda value: bool(value))
        wrapped("x")
        warmup_caches()
        clear_all_caches()
        stats = get_all_cache_stats()
        assert stats["validation"]["size"] == 0
        assert stats["validation"]["misses"] == 0
        assert stats["regex"]["size"] == 0
        assert stats["performance"] == {}
        assert stats["hotspots"] == []

    def test_all_stats_shape(self):
        wrapped = with_cache("IsTruthy", lambda value: bool(value))
        wrapped("x")
        stats = get_all_cache_stats()
        assert set(stats) == {"validation", "regex", "performance", "hotspots"}
        assert stats["performance"]["IsTruthy"]["count"] == 1
        assert stats["hotspots"][0]["name"] == "IsTruthy"

    def test_context_manager_clears_on_exit(self):
        with CacheManager() as mgr:
            with_cache("IsTruthy", lambda value: bool(value), manager=mgr)("x")
            assert len(mgr.validation_cache) == 1
        assert len(mgr.validation_cache) == 0
