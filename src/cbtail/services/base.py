"""
Defines the interfaces to the remote build and log services.

This module provides:
- BuildService: starts builds and fetches build snapshots.
- LogService: fetches log events from a log sink after a cursor.

The orchestration layer depends only on these abstract classes, so the
AWS-backed implementations can be swapped for in-memory fakes in tests.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..models.job import JobHandle, JobRecord, JobRequest, LogEvent, LogSinkLocation

logger = logging.getLogger(__name__)


class BuildService(ABC):
    """Abstract base class for a remote build-job service."""

    @abstractmethod
    async def start_job(self, request: JobRequest) -> JobHandle:
        """
        Start a new build.

        Raises:
            SubmissionError: If the service does not accept the request.
        """

    @abstractmethod
    async def fetch_job_records(self, handle: JobHandle) -> List[JobRecord]:
        """
        Fetch the latest snapshot of a build.

        Returns:
            The matching records; empty if the service knows no such build.

        Raises:
            BuildServiceError: If the request itself fails.
        """


class LogService(ABC):
    """Abstract base class for a log storage and query service."""

    @abstractmethod
    async def fetch_log_events(
        self, sink: LogSinkLocation, cursor: Optional[str]
    ) -> Tuple[List[LogEvent], Optional[str]]:
        """
        Fetch events newer than the cursor.

        Args:
            sink: Where the build writes its logs
            cursor: Token returned by the previous call, None on the first

        Returns:
            The new events in service order, and the cursor to pass next

        Raises:
            LogStreamNotFoundError: If the stream is not queryable yet.
            LogServiceError: For any other failure.
        """
