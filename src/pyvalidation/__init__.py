"""
pyvalidation: annotation-based DTO validation with cached validators.

Fields of plain classes or dataclasses are annotated with rules through
``typing.Annotated`` and validated as a unit. Validator results and compiled
regular expressions are memoized in bounded LRU/TTL caches, and every cache
miss is timed so slow validators show up as hotspots.

Key Features:
    - **Locale Rules**: Chinese name, ID number, mobile, zip code, plate number
    - **Format Rules**: Email, phone, IP, URL, hash (via email-validator and phonenumbers)
    - **Comparison Rules**: Equals, IsIn, Gt/Gte/Lt/Lte, Min/Max, Length
    - **Rule Factory**: New rules in one line
    - **Result Cache**: Type-tagged keys, LRU eviction, TTL, hit/miss statistics
    - **Regex Cache**: Compiled patterns with warm-up
    - **Performance Monitor**: Per-validator timings, hotspots, CSV export
    - **Localized Messages**: Chinese and English

Example Usage:
    Validating a DTO:
        >>> from typing import Annotated
        >>> from pyvalidation import ClassValidator, IsMobile, Gte
        >>>
        >>> class SignupDTO:
        ...     phone: Annotated[str, IsMobile()]
        ...     age: Annotated[int, Gte(18)]
        >>>
        >>> dto = ClassValidator.valid(SignupDTO, {"phone": "13812345678", "age": "20"}, convert=True)
        >>> dto.age
        20

    Caching any predicate:
        >>> from pyvalidation import with_cache, get_all_cache_stats
        >>> is_even = with_cache("IsEven", lambda v: v % 2 == 0)
        >>> is_even(4)
        True

    CLI usage:
        $ pyvalidation check 13812345678 --rule IsMobile
        $ pyvalidation bench a@b.co x@y --rule IsEmail --rounds 1000
"""

from .cache import (
    CacheManager,
    CacheStats,
    RegexCache,
    ValidationCache,
    cached,
    clear_all_caches,
    configure_caches,
    derive_key,
    get_all_cache_stats,
    get_cache_manager,
    get_performance_monitor,
    get_regex_cache,
    get_validation_cache,
    set_cache_manager,
    warmup_caches,
    with_cache,
)
from .core import UNDEFINED, CacheConfig, RegexCacheOptions, ValidationCacheOptions, ValidRule
from .dto import (
    ClassValidator,
    Contains,
    Equals,
    Expose,
    Gt,
    Gte,
    IsCnName,
    IsDate,
    IsDefined,
    IsEmail,
    IsHash,
    IsIdNumber,
    IsIn,
    IsIP,
    IsMobile,
    IsNotEmpty,
    IsNotIn,
    IsPhoneNumber,
    IsPlateNumber,
    IsUrl,
    IsZipCode,
    Length,
    Lt,
    Lte,
    Max,
    Min,
    NotEquals,
    Valid,
    create_parameterized_rule,
    create_simple_rule,
    create_validation_rule,
    plain_to_class,
    validated,
)
from .utils.error_handling import (
    ConfigurationError,
    InvalidPatternError,
    ParamValidationError,
    SerializationError,
    ValidationFailedError,
    ValidationLibError,
)
from .utils.i18n import (
    ErrorMessageFormatter,
    create_validation_error,
    create_validation_errors,
    set_validation_language,
)
from .utils.performance_monitoring import PerformanceMonitor
from .validators import FUNCTION_VALIDATORS, validator_funcs

__version__ = "0.3.0"

__all__ = [
    "CacheManager",
    "CacheStats",
    "RegexCache",
    "ValidationCache",
    "cached",
    "clear_all_caches",
    "configure_caches",
    "derive_key",
    "get_all_cache_stats",
    "get_cache_manager",
    "get_performance_monitor",
    "get_regex_cache",
    "get_validation_cache",
    "set_cache_manager",
    "warmup_caches",
    "with_cache",
    "UNDEFINED",
    "CacheConfig",
    "RegexCacheOptions",
    "ValidationCacheOptions",
    "ValidRule",
    "ClassValidator",
    "Contains",
    "Equals",
    "Expose",
    "Gt",
    "Gte",
    "IsCnName",
    "IsDate",
    "IsDefined",
    "IsEmail",
    "IsHash",
    "IsIdNumber",
    "IsIn",
    "IsIP",
    "IsMobile",
    "IsNotEmpty",
    "IsNotIn",
    "IsPhoneNumber",
    "IsPlateNumber",
    "IsUrl",
    "IsZipCode",
    "Length",
    "Lt",
    "Lte",
    "Max",
    "Min",
    "NotEquals",
    "Valid",
    "create_parameterized_rule",
    "create_simple_rule",
    "create_validation_rule",
    "plain_to_class",
    "validated",
    "ConfigurationError",
    "InvalidPatternError",
    "ParamValidationError",
    "SerializationError",
    "ValidationFailedError",
    "ValidationLibError",
    "ErrorMessageFormatter",
    "create_validation_error",
    "create_validation_errors",
    "set_validation_language",
    "PerformanceMonitor",
    "FUNCTION_VALIDATORS",
    "validator_funcs",
    "__version__",
]
