"""
Exception types and error handling helpers.

This module holds the error taxonomy of the classification engine together
with the small set of helpers used to log and re-raise errors consistently
across components.
"""

import logging
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when validation fails.

    Used for malformed input arguments and configuration values.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class PerformanceError(Exception):
    """
    Base class for classification and monitoring errors.

    Every subclass carries a stable ``code`` string so callers can branch on
    the failure kind without parsing messages.
    """

    code = "PERFORMANCE_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedPlatformVersionError(PerformanceError):
    """Evaluation requested below the minimum supported platform version."""

    code = "UNSUPPORTED_VERSION"

    def __init__(self, platform_version: int, min_version: int):
        super().__init__(
            f"Platform version {platform_version} is not supported. "
            f"Minimum required: {min_version}"
        )
        self.platform_version = platform_version
        self.min_version = min_version


class NoSupportedClassesError(PerformanceError):
    """No requested performance class survived capability filtering."""

    code = "NO_SUPPORTED_CLASSES"

    def __init__(self, requested=()):
        super().__init__(
            "None of the requested performance classes are supported on this device"
        )
        self.requested = tuple(requested)


class MetricSourceError(PerformanceError):
    """
    The primary measurement path failed.

    Raised internally only; the classifier recovers from it by switching to
    fallback scoring.
    """

    code = "METRIC_SOURCE_FAILURE"

    def __init__(self, cause: BaseException):
        super().__init__(f"Metric source failed: {cause}")
        self.cause = cause


class SamplingTickError(PerformanceError):
    """A scheduled tick of a monitoring session failed."""

    code = "SAMPLING_TICK_FAILURE"

    def __init__(self, session_id: str, cause: BaseException):
        super().__init__(str(cause) or type(cause).__name__ or "Unknown error")
        self.session_id = session_id
        self.cause = cause


class InvalidWeightError(PerformanceError):
    """A supplied class weight is not a positive finite number."""

    code = "INVALID_WEIGHT"

    def __init__(self, weight: Any, field_name: str = "weight"):
        super().__init__(f"{field_name} must be a positive number, got {weight!r}")
        self.weight = weight
        self.field_name = field_name


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a CLI error and exit with the given code."""
    exit_code = kwargs.pop('exit_code', 1)

    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    import sys
    sys.exit(exit_code)
