"""
Exception types and error handling helpers.

This module provides the exception hierarchy raised by the build runner
and the small set of helpers used to report errors consistently across
the application.
"""

import logging
import sys
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
    Exception raised when validation of local input fails.

    Raised for malformed environment overrides, unreadable env files and
    invalid configuration values. The CLI maps it to exit code 2.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class CbtailError(Exception):
    """Base class for runtime errors raised while running a build."""


class SubmissionError(CbtailError):
    """The build service rejected or failed to accept a start request."""


class BuildServiceError(CbtailError):
    """Fetching a job record from the build service failed."""


class JobLookupError(CbtailError, LookupError):
    """A job record fetch returned no records for the handle."""

    def __init__(self, build_id: str):
        super().__init__(f"No builds found for id {build_id!r}")
        self.build_id = build_id


class LogServiceError(CbtailError):
    """The log service returned an error while fetching events."""


class LogStreamNotFoundError(LogServiceError):
    """The log stream is registered but not queryable yet."""


class PollTimeoutError(CbtailError):
    """A polling wait exceeded its configured deadline."""

    def __init__(self, what: str, max_wait: float):
        super().__init__(f"Timed out after {max_wait}s waiting for {what}")
        self.what = what
        self.max_wait = max_wait


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
    """
    Report an error to the user and exit the process.

    The error is logged and also written to stderr, since logging is
    silenced below WARNING unless --debug is given.
    """
    exit_code = kwargs.pop('exit_code', 1)
    include_traceback = kwargs.pop('include_traceback', False)

    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    if include_traceback:
        severity = ErrorSeverity.CRITICAL
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    print(error, file=sys.stderr)
    sys.exit(exit_code)
