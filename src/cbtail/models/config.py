"""
Configuration data models.

This module contains the settings loaded from `config.toml`.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RunnerSettings:
    """
    Polling behaviour, loaded from the `[runner]` section.
    """

    # Seconds between job-record and log-event polls.
    poll_interval_seconds: float = 10.0
    # Upper bound on each polling wait; None waits until the build ends.
    max_wait_seconds: Optional[float] = None


@dataclass
class AwsSettings:
    """
    AWS client settings, loaded from the `[aws]` section.
    """

    # Region for both clients; None defers to AWS_REGION / the boto3 chain.
    region: Optional[str] = None
    max_pool_connections: int = 10


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    runner: RunnerSettings = field(default_factory=RunnerSettings)
    aws: AwsSettings = field(default_factory=AwsSettings)
