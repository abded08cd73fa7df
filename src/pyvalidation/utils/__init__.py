"""
Utility modules for pyvalidation.

Modules:
    error_handling: Exception hierarchy and error collection
    logging_config: Logger facade and formatters
    performance_monitoring: Named timers and hotspot reports
    i18n: Localized validation messages
    formatter: JSON and rich output for statistics
"""

from .error_handling import (
    ConfigurationError,
    ErrorCategory,
    ErrorCollector,
    ErrorSeverity,
    InvalidPatternError,
    ParamValidationError,
    SerializationError,
    ValidationErrorDetail,
    ValidationFailedError,
    ValidationLibError,
    create_error_report,
)
from .logging_config import (
    LogFormat,
    LogLevel,
    ValidationLogger,
    configure_logging,
    disable_logging,
    enable_debug_logging,
    get_logger,
)
from .performance_monitoring import PerformanceMetric, PerformanceMonitor, process_memory_mb

__all__ = [
    "ConfigurationError",
    "ErrorCategory",
    "ErrorCollector",
    "ErrorSeverity",
    "InvalidPatternError",
    "ParamValidationError",
    "SerializationError",
    "ValidationErrorDetail",
    "ValidationFailedError",
    "ValidationLibError",
    "create_error_report",
    "LogFormat",
    "LogLevel",
    "ValidationLogger",
    "configure_logging",
    "disable_logging",
    "enable_debug_logging",
    "get_logger",
    "PerformanceMetric",
    "PerformanceMonitor",
    "process_memory_mb",
]
