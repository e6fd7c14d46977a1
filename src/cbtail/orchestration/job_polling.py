"""
Polling of build records until a condition holds.

Two waits are built on the same loop:
- LogSinkResolver waits until the build reports where its logs go.
- JobStatusPoller waits until the build reports completion.

Each poll sleeps for the interval first and then fetches, so a build is
never queried in the same instant it was started. Cancellation of the
awaiting task stops the loop at its next sleep or service call.
"""

import asyncio
import logging
from typing import Callable, Optional

from ..models.job import JobHandle, JobRecord, LogSinkLocation
from ..services.base import BuildService
from ..validation import JobLookupError, PollTimeoutError

logger = logging.getLogger(__name__)


class JobRecordPoller:
    """Base class for waits that poll a build's record on a fixed interval."""

    # Human-readable name of what the wait is for, used in timeouts.
    waiting_for = "build record"

    def __init__(
        self,
        build_service: BuildService,
        poll_interval: float,
        max_wait: Optional[float] = None,
    ):
        self.build_service = build_service
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self.polls = 0

    async def fetch_record(self, handle: JobHandle) -> JobRecord:
        """
        Fetch the latest record for a build.

        Raises:
            JobLookupError: If the service returns no records for the handle
        """
        records = await self.build_service.fetch_job_records(handle)
        self.polls += 1
        if not records:
            raise JobLookupError(handle.build_id)
        return records[0]

    async def poll_until(
        self, handle: JobHandle, is_ready: Callable[[JobRecord], bool]
    ) -> JobRecord:
        """
        Poll until is_ready(record) is true and return that record.

        Raises:
            JobLookupError: If a fetch returns no records
            PollTimeoutError: If max_wait is set and elapses first
        """
        if self.max_wait is None:
            return await self._poll_forever(handle, is_ready)

        try:
            return await asyncio.wait_for(
                self._poll_forever(handle, is_ready), timeout=self.max_wait
            )
        except asyncio.TimeoutError:
            raise PollTimeoutError(f"{self.waiting_for} of {handle}", self.max_wait)

    async def _poll_forever(
        self, handle: JobHandle, is_ready: Callable[[JobRecord], bool]
    ) -> JobRecord:
        while True:
            await asyncio.sleep(self.poll_interval)
            record = await self.fetch_record(handle)
            if is_ready(record):
                return record
            logger.debug(f"Build {handle} not ready ({self.waiting_for}), status {record.status_name}")


class LogSinkResolver(JobRecordPoller):
    """Waits until a build has been assigned its log stream."""

    waiting_for = "log stream"

    async def resolve(self, handle: JobHandle) -> LogSinkLocation:
        record = await self.poll_until(handle, lambda r: r.log_sink is not None)
        logger.info(f"Build {handle} logs to {record.log_sink}")
        return record.log_sink


class JobStatusPoller(JobRecordPoller):
    """Waits until a build reports completion."""

    waiting_for = "build completion"

    async def wait_for_completion(self, handle: JobHandle) -> JobRecord:
        logger.info(f"Waiting for build {handle} to complete")
        return await self.poll_until(handle, lambda r: r.complete)
