"""
Result data models.

This module maps a build's terminal status to the outcome reported to the
caller and, through the CLI, to the process exit code.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Union

from .job import JobStatus

logger = logging.getLogger(__name__)

# Terminal statuses that count as failures, with their exit codes.
STATUS_EXIT_CODES: Dict[JobStatus, int] = {
    JobStatus.FAILED: 1,
    JobStatus.FAULT: 2,
    JobStatus.STOPPED: 3,
    JobStatus.TIMED_OUT: 4,
}


@dataclass(frozen=True)
class ExecutionOutcome:
    """
    The terminal result of a build run.

    exit_code is 0 for success. unmapped is set when the build completed
    with a status that has no entry in the exit-code table; such runs are
    still reported as success.
    """

    status: Union[JobStatus, str]
    exit_code: int = 0
    unmapped: bool = False

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def status_name(self) -> str:
        return self.status.value if isinstance(self.status, JobStatus) else str(self.status)

    @property
    def message(self) -> str:
        return f"Build finished with status {self.status_name}"

    @classmethod
    def from_status(cls, status: Union[JobStatus, str]) -> "ExecutionOutcome":
        """Build the outcome for a terminal status."""
        if status == JobStatus.SUCCEEDED:
            return cls(status=status)

        exit_code = STATUS_EXIT_CODES.get(status)
        if exit_code is not None:
            return cls(status=status, exit_code=exit_code)

        name = status.value if isinstance(status, JobStatus) else status
        logger.warning(
            f"Build completed with unmapped status {name!r}; reporting success"
        )
        return cls(status=status, unmapped=True)
