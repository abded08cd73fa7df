"""
Error handling and reporting for pyvalidation.

This module defines the exception hierarchy raised by the caches, the
validator registry and the DTO layer, plus a small collector used by
best-effort batch operations (pattern warm-up) that must keep going when a
single item fails.

Error Categories:
    - VALIDATION: A value or DTO failed one of its rules
    - CONFIGURATION: Invalid cache or logging configuration
    - PATTERN: A regular expression failed to compile
    - SERIALIZATION: A value could not be turned into a cache key
    - TYPE: A parameter had the wrong runtime type
    - UNKNOWN: Anything else

Classes:
    ErrorSeverity: Error severity levels (LOW, MEDIUM, HIGH, CRITICAL)
    ErrorCategory: Error classification categories
    ErrorInfo: Detailed error information container
    ValidationErrorDetail: One failed constraint on one field
    ValidationLibError: Base exception class for pyvalidation errors
    InvalidPatternError: Raised by the regex cache on malformed patterns
    SerializationError: Raised by cache key derivation on unencodable input
    ConfigurationError: Raised on invalid configuration values
    ParamValidationError: Raised by parameter validation (status 400)
    ValidationFailedError: Raised by DTO validation with every failure (status 400)
    ErrorCollector: Batch error collection and analysis

Functions:
    create_error_report: Generate a human-readable error report

Example:
    Collecting failures from a batch:
        >>> from pyvalidation.utils.error_handling import ErrorCollector
        >>> from pyvalidation.cache.regex_cache import RegexCache
        >>>
        >>> collector = ErrorCollector()
        >>> RegexCache().precompile(["^a$", "(bad"], error_collector=collector)
        >>> collector.get_summary()["total_errors"]
        1

    Inspecting a DTO failure:
        >>> try:
        ...     ClassValidator.valid(UserDTO, {"phone": "123"})
        ... except ValidationFailedError as e:
        ...     print(e.status_code, e.first_error().message)
"""

from __future__ import annotations

import sys
import time
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    PATTERN = "pattern"
    SERIALIZATION = "serialization"
    TYPE = "type"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Detailed error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    exception_type: str | None = None
    traceback_str: str | None = None
    timestamp: float = field(default_factory=time.time)
    context: dict[str, Any] = field(default_factory=dict)
    suggestions: list[str] = field(default_factory=list)


@dataclass
class ValidationErrorDetail:
    """A single failed constraint on a single field."""

    field: str
    value: Any
    constraints: dict[str, str]
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "value": self.value,
            "constraints": dict(self.constraints),
            "message": self.message,
        }


class ValidationLibError(Exception):
    """Base exception for pyvalidation errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.suggestions: list[str] = suggestions or []
        self.context: dict[str, Any] = context or {}
        self.timestamp: float = time.time()


class InvalidPatternError(ValidationLibError):
    """A regular expression could not be compiled."""

    def __init__(self, pattern: str, reason: str | None = None, flags: Any = None) -> None:
        context: dict[str, Any] = {"pattern": pattern}
        if flags is not None:
            context["flags"] = flags
        if reason:
            context["reason"] = reason
        super().__init__(
            f"Invalid regex pattern: {pattern}",
            category=ErrorCategory.PATTERN,
            severity=ErrorSeverity.HIGH,
            suggestions=[
                "Check the pattern for unbalanced groups or brackets",
                "Verify the flag letters (i, m, s, x, u, a)",
            ],
            context=context,
        )
        self.pattern: str = pattern
        self.reason: str | None = reason


class SerializationError(ValidationLibError):
    """A value or argument list could not be serialized into a cache key."""

    def __init__(self, validator_name: str, reason: str) -> None:
        super().__init__(
            f"Cannot derive cache key for '{validator_name}': {reason}",
            category=ErrorCategory.SERIALIZATION,
            severity=ErrorSeverity.MEDIUM,
            suggestions=[
                "Remove reference cycles from the validated value",
                "Pass plain JSON-compatible data to cached validators",
            ],
            context={"validator": validator_name, "reason": reason},
        )
        self.validator_name: str = validator_name


class ConfigurationError(ValidationLibError):
    """Configuration-related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            suggestions=[
                "Check cache sizes are positive integers",
                "Check TTL values are non-negative",
                "Use default configuration",
            ],
            context=context,
        )


class ParamValidationError(ValidationLibError):
    """A function parameter failed its type check or validation rule."""

    status_code: int = 400

    def __init__(self, message: str, param_name: str | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            context={"param": param_name} if param_name else None,
        )
        self.param_name: str | None = param_name

    @property
    def code(self) -> int:
        return self.status_code


class ValidationFailedError(ValidationLibError):
    """
    One or more DTO constraints failed.

    The exception message is the first failure's message so that callers
    that only print the error still see something useful; the full list is
    available on ``errors``.
    """

    status_code: int = 400

    def __init__(
        self,
        errors: list[ValidationErrorDetail],
        message: str | None = None,
    ) -> None:
        if message is None:
            message = errors[0].message if errors else "Validation failed"
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            context={"fields": [e.field for e in errors]},
        )
        self.errors: list[ValidationErrorDetail] = list(errors)

    def first_error(self) -> ValidationErrorDetail | None:
        """Return the first failure, if any."""
        return self.errors[0] if self.errors else None

    def field_errors(self, field_name: str) -> list[ValidationErrorDetail]:
        """Return every failure reported for ``field_name``."""
        return [e for e in self.errors if e.field == field_name]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": type(self).__name__,
            "message": self.message,
            "status_code": self.status_code,
            "timestamp": self.timestamp,
            "errors": [e.to_dict() for e in self.errors],
        }


class ErrorCollector:
    """Collects and manages errors during batch operations."""

    def __init__(self, max_errors: int = 100) -> None:
        self.max_errors = max_errors
        self.errors: list[ErrorInfo] = []
        self.error_counts: dict[ErrorCategory, int] = {}
        self.suppressed_categories: set[ErrorCategory] = set()

    def add_error(
        self,
        exception: Exception,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        context: dict[str, Any] | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        """Add an error to the collection."""
        if isinstance(exception, ValidationLibError):
            error_category = exception.category
            error_severity = exception.severity
            error_suggestions = exception.suggestions or suggestions or []
            error_context = {**exception.context, **(context or {})}
        else:
            error_category = category or self._classify_exception(exception)
            error_severity = severity or ErrorSeverity.MEDIUM
            error_suggestions = suggestions or []
            error_context = context or {}

        if error_category in self.suppressed_categories:
            return

        error_info = ErrorInfo(
            category=error_category,
            severity=error_severity,
            message=str(exception),
            exception_type=type(exception).__name__,
            traceback_str=traceback.format_exc() if sys.exc_info()[0] else None,
            context=error_context,
            suggestions=error_suggestions,
        )

        if len(self.errors) < self.max_errors:
            self.errors.append(error_info)

        self.error_counts[error_category] = self.error_counts.get(error_category, 0) + 1

    def _classify_exception(self, exception: Exception) -> ErrorCategory:
        """Classify exception into error category."""
        if isinstance(exception, (TypeError, AttributeError)):
            return ErrorCategory.TYPE
        if isinstance(exception, ValueError):
            return ErrorCategory.VALIDATION
        if isinstance(exception, RecursionError):
            return ErrorCategory.SERIALIZATION
        return ErrorCategory.UNKNOWN

    def suppress_category(self, category: ErrorCategory) -> None:
        """Suppress errors of a specific category."""
        self.suppressed_categories.add(category)

    def unsuppress_category(self, category: ErrorCategory) -> None:
        """Stop suppressing errors of a specific category."""
        self.suppressed_categories.discard(category)

    def get_errors_by_category(self, category: ErrorCategory) -> list[ErrorInfo]:
        """Get all errors of a specific category."""
        return [error for error in self.errors if error.category == category]

    def get_errors_by_severity(self, severity: ErrorSeverity) -> list[ErrorInfo]:
        """Get all errors of a specific severity."""
        return [error for error in self.errors if error.severity == severity]

    def get_critical_errors(self) -> list[ErrorInfo]:
        """Get all critical errors."""
        return self.get_errors_by_severity(ErrorSeverity.CRITICAL)

    def has_critical_errors(self) -> bool:
        """Check if there are any critical errors."""
        return len(self.get_critical_errors()) > 0

    def get_summary(self) -> dict[str, Any]:
        """Get error summary statistics."""
        return {
            "total_errors": len(self.errors),
            "by_category": {k.value: v for k, v in self.error_counts.items()},
            "by_severity": {
                severity.value: len(self.get_errors_by_severity(severity))
                for severity in ErrorSeverity
            },
            "suppressed_categories": [c.value for c in self.suppressed_categories],
            "has_critical": self.has_critical_errors(),
        }

    def clear(self) -> None:
        """Clear all collected errors."""
        self.errors.clear()
        self.error_counts.clear()


def create_error_report(error_collector: ErrorCollector) -> str:
    """Create a human-readable error report."""
    if not error_collector.errors:
        return "No errors occurred."

    summary = error_collector.get_summary()

    report = ["Validation Error Report", "=" * 50, ""]

    report.append(f"Total errors: {summary['total_errors']}")
    report.append(f"High severity errors: {summary['by_severity']['high']}")
    report.append("")

    report.append("Errors by category:")
    for category, count in summary["by_category"].items():
        report.append(f"  {category}: {count}")
    report.append("")

    report.append("Details:")
    for error in error_collector.errors:
        report.append(f"  - {error.message}")
        if error.suggestions:
            report.append(f"    Suggestions: {', '.join(error.suggestions)}")

    return "\n".join(report)
