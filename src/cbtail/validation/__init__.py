"""
Validation and error handling for the cbtail package.

This module provides input validation, env override parsing, and the
exception hierarchy with consistent error reporting across the application.
"""

from .exceptions import (
    BuildServiceError,
    CbtailError,
    ErrorSeverity,
    JobLookupError,
    LogServiceError,
    LogStreamNotFoundError,
    PollTimeoutError,
    SubmissionError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
)
from .validators import (
    validate_enum_choice,
    validate_positive_float,
    validate_positive_integer,
    validate_project_name,
)
from .env import merge_env_overrides, parse_env_override, read_env_file

__all__ = [
    # Exceptions
    "BuildServiceError",
    "CbtailError",
    "ErrorSeverity",
    "JobLookupError",
    "LogServiceError",
    "LogStreamNotFoundError",
    "PollTimeoutError",
    "SubmissionError",
    "ValidationError",
    # Error handling
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    # Validators
    "validate_enum_choice",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_project_name",
    # Env overrides
    "merge_env_overrides",
    "parse_env_override",
    "read_env_file",
]
