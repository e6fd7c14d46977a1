"""
Shared data structures for the orchestration module.

This module defines the run configuration, the orchestrator states and the
polling defaults used across the orchestration components.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..models.job import JobRequest


class PollingDefaults:
    """
    Centralized polling configuration.
    """
    # Seconds between job-record and log-event polls.
    POLL_INTERVAL = 10.0
    # No deadline: waits last as long as the build does.
    MAX_WAIT: Optional[float] = None


@dataclass(frozen=True)
class RunnerConfig:
    """
    Immutable parameters for one build run.

    Built once by the CLI (or a caller) and handed to the orchestrator.
    """
    request: JobRequest
    poll_interval: float = PollingDefaults.POLL_INTERVAL
    # Upper bound in seconds on each polling wait; None disables it.
    max_wait: Optional[float] = PollingDefaults.MAX_WAIT

    def __post_init__(self):
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be > 0, got {self.poll_interval}")
        if self.max_wait is not None and self.max_wait <= 0:
            raise ValueError(f"max_wait must be > 0 or None, got {self.max_wait}")


class OrchestratorState(Enum):
    """Lifecycle states of a BuildOrchestrator run."""
    STARTING = "starting"
    WAITING_FOR_SINK = "waiting_for_sink"
    STREAMING = "streaming"
    COMPLETING = "completing"
    DONE = "done"
