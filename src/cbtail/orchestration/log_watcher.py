"""
Tailing of a build's log stream.
"""

import asyncio
import logging
from typing import Callable, Optional

from ..models.job import LogEvent, LogSinkLocation
from ..services.base import LogService
from ..validation import LogStreamNotFoundError

logger = logging.getLogger(__name__)


class LogStreamWatcher:
    """
    Polls a log stream and emits new events in service order.

    The stream can be assigned to a build shortly before it becomes
    queryable, so "stream not found" is retried on the normal schedule.
    Any other LogServiceError ends the watch. The watch otherwise runs
    until its task is cancelled.
    """

    def __init__(self, log_service: LogService, sink: LogSinkLocation, poll_interval: float):
        self.log_service = log_service
        self.sink = sink
        self.poll_interval = poll_interval
        self.cursor: Optional[str] = None
        self.events_emitted = 0
        self.polls = 0

    async def watch(self, emit: Callable[[LogEvent], None]) -> None:
        """
        Emit events until cancelled.

        Args:
            emit: Called once per event, in the order the service returned them

        Raises:
            LogServiceError: On any log-service failure other than a missing stream
        """
        logger.info(f"Watching {self.sink}")
        try:
            while True:
                await asyncio.sleep(self.poll_interval)
                await self.poll_once(emit)
        except asyncio.CancelledError:
            logger.debug(f"Stopped watching {self.sink} after {self.events_emitted} events")
            raise

    async def poll_once(self, emit: Callable[[LogEvent], None]) -> int:
        """Fetch and emit one batch; returns the number of events emitted."""
        self.polls += 1
        try:
            events, next_cursor = await self.log_service.fetch_log_events(self.sink, self.cursor)
        except LogStreamNotFoundError:
            logger.debug(f"Log stream {self.sink} not found yet; retrying")
            return 0

        for event in events:
            emit(event)
        self.events_emitted += len(events)
        self.cursor = next_cursor
        return len(events)
