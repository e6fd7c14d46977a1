"""
Configuration validation utilities.

This module turns raw TOML sections into validated settings objects.
"""

import logging
from typing import Any, Dict

from ..models.config import AppConfig, AwsSettings, RunnerSettings
from ..validation import (
    ValidationError,
    validate_positive_float,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)


def validate_runner_config(runner_data: Dict[str, Any]) -> RunnerSettings:
    """
    Validate and create RunnerSettings from the `[runner]` section.

    Args:
        runner_data: Raw runner section from TOML

    Returns:
        Validated RunnerSettings instance

    Raises:
        ValidationError: If validation fails
    """
    poll_interval = validate_positive_float(
        runner_data.get("poll_interval_seconds", 10.0),
        min_value=0.001,
        max_value=3600.0,
        field_name="runner.poll_interval_seconds",
    )

    # 0 disables the deadline.
    max_wait = validate_positive_float(
        runner_data.get("max_wait_seconds", 0),
        min_value=0.0,
        field_name="runner.max_wait_seconds",
    )

    return RunnerSettings(
        poll_interval_seconds=poll_interval,
        max_wait_seconds=max_wait or None,
    )


def validate_aws_config(aws_data: Dict[str, Any]) -> AwsSettings:
    """Validate and create AwsSettings from the `[aws]` section."""
    region = aws_data.get("region", "")
    if not isinstance(region, str):
        raise ValidationError(
            f"aws.region must be a string, got {region!r}",
            field_name="aws.region",
            value=region,
        )

    max_pool_connections = validate_positive_integer(
        aws_data.get("max_pool_connections", 10),
        min_value=1,
        max_value=1000,
        field_name="aws.max_pool_connections",
    )

    return AwsSettings(
        region=region.strip() or None,
        max_pool_connections=max_pool_connections,
    )


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """Validate every section of the main configuration file."""
    unknown = set(config_data) - {"runner", "aws"}
    if unknown:
        logger.warning(f"Ignoring unknown configuration sections: {sorted(unknown)}")

    return AppConfig(
        runner=validate_runner_config(config_data.get("runner", {})),
        aws=validate_aws_config(config_data.get("aws", {})),
    )
