"""
Data models for the build runner.

Configuration Models:
- Application settings loaded from config.toml

Job Models:
- Start requests, handles and job snapshots
- Log sink locations and log events

Result Models:
- The terminal outcome of a run and its exit code
"""

from .config import AppConfig, AwsSettings, RunnerSettings
from .job import (
    EnvOverride,
    JobHandle,
    JobRecord,
    JobRequest,
    JobStatus,
    LogEvent,
    LogSinkLocation,
)
from .results import STATUS_EXIT_CODES, ExecutionOutcome

__all__ = [
    # Configuration
    "AppConfig",
    "AwsSettings",
    "RunnerSettings",
    # Jobs
    "EnvOverride",
    "JobHandle",
    "JobRecord",
    "JobRequest",
    "JobStatus",
    "LogEvent",
    "LogSinkLocation",
    # Results
    "STATUS_EXIT_CODES",
    "ExecutionOutcome",
]
