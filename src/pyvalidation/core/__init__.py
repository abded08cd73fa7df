"""
Core types, configuration and parameter handling.
"""

from .config import CacheConfig, RegexCacheOptions, ValidationCacheOptions
from .params import check_params_type, convert_params_type
from .types import (
    UNDEFINED,
    EmailOptions,
    HashAlgorithm,
    Undefined,
    URLOptions,
    ValidatorFunction,
    ValidRule,
)

__all__ = [
    "CacheConfig",
    "RegexCacheOptions",
    "ValidationCacheOptions",
    "check_params_type",
    "convert_params_type",
    "UNDEFINED",
    "EmailOptions",
    "HashAlgorithm",
    "Undefined",
    "URLOptions",
    "ValidatorFunction",
    "ValidRule",
]
