"""
Configuration module for pyvalidation.

Defines the settings for the validation result cache and the regex
compilation cache. Options are plain dataclasses validated on construction;
invalid values raise :class:`ConfigurationError`.

Classes:
    ValidationCacheOptions: Size, TTL and read behaviour of the result cache
    RegexCacheOptions: Size and TTL of the regex cache
    CacheConfig: Both option sets together

TTL units:
    All ``ttl`` fields are seconds. Mappings may give ``ttl_ms`` instead, and
    :meth:`CacheConfig.from_external` reads the camelCase form used by
    external config files, where ``ttl`` is in milliseconds.

Example:
    >>> from pyvalidation.core.config import CacheConfig
    >>> config = CacheConfig.from_dict({"validation": {"max_size": 100, "ttl": 30}})
    >>> config.validation.max_size
    100
    >>> CacheConfig.from_external({"regex": {"max": 50, "ttl": 60000}}).regex.ttl
    60.0
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from ..utils.error_handling import ConfigurationError

_KEY_ALIASES = {
    "max": "max_size",
    "maxSize": "max_size",
    "allowStale": "allow_stale",
    "updateAgeOnGet": "update_age_on_get",
    "ttlMs": "ttl_ms",
}


def _normalize(section: str, data: Mapping[str, Any], allowed: set[str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = _KEY_ALIASES.get(raw_key, raw_key)
        if key == "ttl_ms":
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ConfigurationError(
                    f"{section}.ttl_ms must be a number",
                    context={"field": f"{section}.ttl_ms", "value": value},
                )
            key, value = "ttl", value / 1000.0
        if key not in allowed:
            raise ConfigurationError(
                f"Unknown {section} cache option: {raw_key}",
                context={"field": f"{section}.{raw_key}"},
            )
        values[key] = value
    return values


def _check_size(section: str, max_size: Any) -> None:
    if not isinstance(max_size, int) or isinstance(max_size, bool) or max_size < 1:
        raise ConfigurationError(
            f"{section}.max_size must be a positive integer",
            context={"field": f"{section}.max_size", "value": max_size},
        )


def _check_ttl(section: str, ttl: Any) -> None:
    if (
        not isinstance(ttl, (int, float))
        or isinstance(ttl, bool)
        or math.isnan(ttl)
        or ttl < 0
    ):
        raise ConfigurationError(
            f"{section}.ttl must be a non-negative number of seconds (0 = no expiry)",
            context={"field": f"{section}.ttl", "value": ttl},
        )


@dataclass(slots=True)
class ValidationCacheOptions:
    max_size: int = 5000
    ttl: float = 600.0  # 10 minutes
    allow_stale: bool = False
    # sliding expiration: a hit restarts the entry's TTL
    update_age_on_get: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise ConfigurationError on invalid values."""
        _check_size("validation", self.max_size)
        _check_ttl("validation", self.ttl)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ValidationCacheOptions:
        allowed = {f.name for f in fields(cls)}
        return cls(**_normalize("validation", data, allowed))


@dataclass(slots=True)
class RegexCacheOptions:
    max_size: int = 200
    ttl: float = 1800.0  # 30 minutes

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise ConfigurationError on invalid values."""
        _check_size("regex", self.max_size)
        _check_ttl("regex", self.ttl)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RegexCacheOptions:
        allowed = {f.name for f in fields(cls)}
        return cls(**_normalize("regex", data, allowed))


@dataclass(slots=True)
class CacheConfig:
    validation: ValidationCacheOptions = field(default_factory=ValidationCacheOptions)
    regex: RegexCacheOptions = field(default_factory=RegexCacheOptions)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CacheConfig:
        """Build from ``{"validation": {...}, "regex": {...}}`` with TTLs in seconds."""
        unknown = set(data) - {"validation", "regex"}
        if unknown:
            raise ConfigurationError(
                f"Unknown cache sections: {', '.join(sorted(unknown))}",
                context={"sections": sorted(unknown)},
            )
        return cls(
            validation=ValidationCacheOptions.from_dict(data.get("validation") or {}),
            regex=RegexCacheOptions.from_dict(data.get("regex") or {}),
        )

    @classmethod
    def from_external(cls, data: Mapping[str, Any]) -> CacheConfig:
        """
        Build from the camelCase form with TTLs in milliseconds, e.g.
        ``{"validation": {"max": 5000, "ttl": 600000, "allowStale": False}}``.
        """
        converted: dict[str, dict[str, Any]] = {}
        for section, options in data.items():
            converted[section] = {
                ("ttl_ms" if key == "ttl" else key): value for key, value in (options or {}).items()
            }
        return cls.from_dict(converted)

    def to_dict(self) -> dict[str, Any]:
        return {
            "validation": {
                "max_size": self.validation.max_size,
                "ttl": self.validation.ttl,
                "allow_stale": self.validation.allow_stale,
                "update_age_on_get": self.validation.update_age_on_get,
            },
            "regex": {"max_size": self.regex.max_size, "ttl": self.regex.ttl},
        }
