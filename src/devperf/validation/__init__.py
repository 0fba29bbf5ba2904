"""
Validation and error handling for the devperf package.

This module provides input validation, the classification error taxonomy
and consistent error reporting across the application.
"""

from .exceptions import (
    ErrorSeverity,
    InvalidWeightError,
    MetricSourceError,
    NoSupportedClassesError,
    PerformanceError,
    SamplingTickError,
    UnsupportedPlatformVersionError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
)

from .validators import (
    validate_enum_choice,
    validate_interval_ms,
    validate_positive_float,
    validate_positive_integer,
    validate_string_list,
    validate_weight,
)

__all__ = [
    # Errors
    "ErrorSeverity",
    "ValidationError",
    "PerformanceError",
    "UnsupportedPlatformVersionError",
    "NoSupportedClassesError",
    "MetricSourceError",
    "SamplingTickError",
    "InvalidWeightError",
    # Handlers
    "handle_error",
    "handle_config_error",
    "handle_cli_error",
    # Validators
    "validate_enum_choice",
    "validate_interval_ms",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_string_list",
    "validate_weight",
]
