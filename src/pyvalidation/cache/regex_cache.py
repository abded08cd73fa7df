"""
Regex compilation cache.

Compiled patterns are produced with the ``regex`` library and kept in a
bounded LRU/TTL store. A pattern that fails to compile raises
:class:`InvalidPatternError` and is never cached, so the next request for it
fails the same way.

Classes:
    PatternSpec: A pattern and its optional flags, for batch warm-up
    RegexCache: Bounded cache of compiled patterns

Flags:
    Flags may be given as a string of letters or as an int of ``regex`` flags:
    ``i`` IGNORECASE, ``m`` MULTILINE, ``s`` DOTALL, ``x`` VERBOSE,
    ``u`` UNICODE, ``a`` ASCII.

Example:
    >>> cache = RegexCache()
    >>> cache.get(r"^\\d{6}$").match("100000") is not None
    True
    >>> cache.get("^abc$", "i").match("ABC") is not None
    True
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union

import regex as regex_mod

from ..utils.error_handling import ErrorCollector, InvalidPatternError
from ..utils.logging_config import get_logger
from .backends import MemoryCache
from .models import CacheStats

DEFAULT_REGEX_CACHE_SIZE = 200
DEFAULT_REGEX_CACHE_TTL = 1800.0  # 30 minutes

_FLAG_LETTERS: dict[str, int] = {
    "i": regex_mod.IGNORECASE,
    "m": regex_mod.MULTILINE,
    "s": regex_mod.DOTALL,
    "x": regex_mod.VERBOSE,
    "u": regex_mod.UNICODE,
    "a": regex_mod.ASCII,
}

Flags = Union[str, int, None]


@dataclass(frozen=True, slots=True)
class PatternSpec:
    pattern: str
    flags: Flags = None


def parse_flags(pattern: str, flags: Flags) -> int:
    """Turn a flag string or int into ``regex`` flag bits."""
    if not flags:
        return 0
    if isinstance(flags, int):
        return flags
    bits = 0
    for letter in flags:
        try:
            bits |= _FLAG_LETTERS[letter]
        except KeyError:
            raise InvalidPatternError(pattern, f"unknown flag '{letter}'", flags=flags) from None
    return bits


def pattern_key(pattern: str, flags: Flags = None) -> str:
    return f"{pattern}:::{flags}" if flags else pattern


def _as_spec(item: PatternSpec | Mapping[str, Any] | str) -> PatternSpec:
    if isinstance(item, PatternSpec):
        return item
    if isinstance(item, str):
        return PatternSpec(item)
    if isinstance(item, Mapping) and isinstance(item.get("pattern"), str):
        return PatternSpec(item["pattern"], item.get("flags"))
    raise InvalidPatternError(repr(item), "expected a pattern string or a mapping with 'pattern'")


class RegexCache:
    """
    Bounded cache of compiled regular expressions.

    Hits and misses are counted the same way as in the validation cache.

    Args:
        max_size: Maximum number of compiled patterns
        ttl: TTL in seconds (<= 0 disables expiry)
        clock: Monotonic time source in seconds
    """

    def __init__(
        self,
        max_size: int = DEFAULT_REGEX_CACHE_SIZE,
        ttl: float = DEFAULT_REGEX_CACHE_TTL,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._store: MemoryCache[regex_mod.Pattern] = MemoryCache(
            max_size=max_size, default_ttl=ttl, clock=clock
        )

    @property
    def max_size(self) -> int:
        return self._store.max_size

    @property
    def ttl(self) -> float:
        return self._store.default_ttl

    def get(self, pattern: str, flags: Flags = None) -> regex_mod.Pattern:
        """
        Get the compiled form of ``pattern``, compiling it on a miss.

        Raises:
            InvalidPatternError: If the pattern or flags are malformed
        """
        key = pattern_key(pattern, flags)
        compiled = self._store.get(key)
        if compiled is None:
            compiled = self._compile(pattern, flags)
            self._store.set(key, compiled)
        return compiled

    def _compile(self, pattern: str, flags: Flags) -> regex_mod.Pattern:
        bits = parse_flags(pattern, flags)
        try:
            return regex_mod.compile(pattern, bits)
        except (regex_mod.error, ValueError, TypeError) as exc:
            raise InvalidPatternError(pattern, str(exc), flags=flags) from exc

    def precompile(
        self,
        patterns: Iterable[PatternSpec | Mapping[str, Any] | str],
        error_collector: ErrorCollector | None = None,
    ) -> int:
        """
        Compile a batch of patterns ahead of use.

        A pattern that fails to compile, or an item that is not a pattern, is
        logged (and added to ``error_collector`` when given); the rest of the
        batch still runs.
        Warm-up does not count as hits or misses.

        Returns:
            Number of patterns that are now cached
        """
        logger = get_logger()
        started = time.perf_counter()
        compiled_count = 0
        failed = 0
        for item in patterns:
            try:
                spec = _as_spec(item)
                key = pattern_key(spec.pattern, spec.flags)
                if self._store.peek(key) is not None:
                    compiled_count += 1
                    continue
                self._store.set(key, self._compile(spec.pattern, spec.flags))
            except InvalidPatternError as exc:
                failed += 1
                logger.log_pattern_error(exc.pattern, exc.reason or exc.message)
                if error_collector is not None:
                    error_collector.add_error(exc)
                continue
            compiled_count += 1
        logger.log_warmup(compiled_count, failed, (time.perf_counter() - started) * 1000.0)
        return compiled_count

    def has(self, pattern: str, flags: Flags = None) -> bool:
        return self._store.peek(pattern_key(pattern, flags)) is not None

    def clear(self) -> None:
        """Remove all compiled patterns and reset the counters."""
        self._store.clear()

    def keys(self) -> list[str]:
        return self._store.keys()

    def get_stats(self) -> CacheStats:
        return self._store.get_stats()

    def __len__(self) -> int:
        return len(self._store)
