"""
Validation functions for command-line and configuration values.
"""

import re
from typing import Any, List, Optional

from .exceptions import ValidationError

# CodeBuild project names: 2-255 chars, leading alphanumeric.
_PROJECT_NAME_RE = re.compile(r'^[A-Za-z0-9][A-Za-z0-9_-]{1,254}$')


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a float within range.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """Validate that a value is an integer within range."""
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_project_name(name: Any, field_name: str = "project_name") -> str:
    """
    Validate a CodeBuild project name.

    Args:
        name: Project name to validate
        field_name: Name of the field being validated

    Returns:
        Validated project name

    Raises:
        ValidationError: If name is empty or not a valid project name
    """
    if not name or not isinstance(name, str):
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=name
        )

    if not _PROJECT_NAME_RE.match(name):
        raise ValidationError(
            f"{field_name} must be 2-255 alphanumeric characters, underscores or hyphens: {name}",
            field_name=field_name,
            value=name
        )

    return name


def validate_enum_choice(
    value: Any,
    valid_choices: List[str],
    field_name: str = "choice"
) -> str:
    """
    Validate that a value is one of a fixed set of strings.

    Raises:
        ValidationError: If the value is not one of valid_choices
    """
    if value not in valid_choices:
        raise ValidationError(
            f"{field_name} must be one of {valid_choices}, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value
