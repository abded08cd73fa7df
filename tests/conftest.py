"""
Shared test fixtures and utilities for pyvalidation tests.

Every test gets a fresh default cache manager and the default message
language, so cache statistics and messages never leak between tests.
"""

from __future__ import annotations

import pytest

from pyvalidation.cache.manager import CacheManager, set_cache_manager
from pyvalidation.utils.i18n import set_validation_language


class FakeClock:
    """Manually advanced time source in seconds."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SteppingClock:
    """Time source that moves forward by ``step`` seconds on every read."""

    def __init__(self, step: float, start: float = 0.0) -> None:
        self.step = step
        self.now = start - step

    def __call__(self) -> float:
        self.now += self.step
        return self.now


@pytest.fixture(autouse=True)
def fresh_default_manager():
    """Install a clean default manager for each test and restore the old one."""
    previous = set_cache_manager(None)
    set_validation_language("zh")
    yield
    set_cache_manager(previous)
    set_validation_language("zh")


@pytest.fixture
def english_messages():
    set_validation_language("en")
    yield
    set_validation_language("zh")


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def stepping_clock():
    """Factory for clocks that advance by a fixed step on every read."""
    return SteppingClock


@pytest.fixture
def manager(fake_clock: FakeClock) -> CacheManager:
    """A manager with a controllable expiry clock, installed as the default."""
    mgr = CacheManager(clock=fake_clock)
    set_cache_manager(mgr)
    return mgr


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast isolated unit tests")
    config.addinivalue_line("markers", "integration: tests spanning several components")
