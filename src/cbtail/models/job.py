"""
Build job data models.

These types describe a start request, the handle returned for it, and the
snapshots fetched while the job runs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class JobStatus(str, Enum):
    """Build status values reported by CodeBuild."""
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    FAULT = "FAULT"
    STOPPED = "STOPPED"
    TIMED_OUT = "TIMED_OUT"
    IN_PROGRESS = "IN_PROGRESS"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Union["JobStatus", str]:
        """Return the matching member, or the raw string if it is unknown."""
        if raw is None:
            return cls.IN_PROGRESS
        try:
            return cls(raw)
        except ValueError:
            return raw


@dataclass(frozen=True)
class EnvOverride:
    """A single environment variable override for a build."""

    name: str
    value: str
    # CodeBuild variable type: PLAINTEXT, PARAMETER_STORE or SECRETS_MANAGER.
    type: str = "PLAINTEXT"


@dataclass(frozen=True)
class JobRequest:
    """
    Everything needed to start one build.

    Overrides are kept in submission order with unique names; use
    merge_env_overrides to build the tuple from raw user input.
    """

    project_name: str
    env: Tuple[EnvOverride, ...] = ()
    source_type: Optional[str] = None
    source_location: Optional[str] = None
    no_artifacts: bool = False

    def __post_init__(self):
        if not self.project_name:
            raise ValueError("project_name must be non-empty")
        names = [e.name for e in self.env]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate environment override names in {names}")


@dataclass(frozen=True)
class JobHandle:
    """Identifier of a started build."""

    build_id: str

    def __str__(self) -> str:
        return self.build_id


@dataclass(frozen=True)
class LogSinkLocation:
    """CloudWatch Logs location a build writes to."""

    group_name: str
    stream_name: str

    def __str__(self) -> str:
        return f"{self.group_name}/{self.stream_name}"


@dataclass(frozen=True)
class JobRecord:
    """A full snapshot of a build's state."""

    build_id: str
    complete: bool
    status: Union[JobStatus, str] = JobStatus.IN_PROGRESS
    log_sink: Optional[LogSinkLocation] = None

    @property
    def status_name(self) -> str:
        return self.status.value if isinstance(self.status, JobStatus) else str(self.status)


@dataclass(frozen=True)
class LogEvent:
    """One log line as returned by the log service."""

    message: str
    timestamp: Optional[int] = None
