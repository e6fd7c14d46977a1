"""
CloudWatch Logs implementation of the log service.

Events are read with GetLogEvents from the head of the stream. The cursor
is the forward token; CloudWatch hands back the same token once the stream
has no newer events, which is how the end of a batch is detected.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Dict, List, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from ..models.job import LogEvent, LogSinkLocation
from ..validation import LogServiceError, LogStreamNotFoundError
from .base import LogService

logger = logging.getLogger(__name__)

# Safety limit on pages fetched in a single batch.
MAX_PAGES_PER_BATCH = 100


class CloudWatchLogService(LogService):
    """Log service backed by a boto3 `logs` client."""

    def __init__(self, client: Any, executor: Optional[ThreadPoolExecutor] = None):
        self.client = client
        self.executor = executor

    async def _get_page(self, sink: LogSinkLocation, cursor: Optional[str]) -> Dict[str, Any]:
        kwargs = {
            "logGroupName": sink.group_name,
            "logStreamName": sink.stream_name,
            "startFromHead": True,
        }
        if cursor:
            kwargs["nextToken"] = cursor

        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(
                self.executor, partial(self.client.get_log_events, **kwargs)
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ResourceNotFoundException":
                raise LogStreamNotFoundError(f"Log stream {sink} does not exist yet") from e
            raise LogServiceError(f"Failed to read log stream {sink}: {e}") from e
        except BotoCoreError as e:
            raise LogServiceError(f"Failed to read log stream {sink}: {e}") from e

    async def fetch_log_events(
        self, sink: LogSinkLocation, cursor: Optional[str]
    ) -> Tuple[List[LogEvent], Optional[str]]:
        events: List[LogEvent] = []
        for _ in range(MAX_PAGES_PER_BATCH):
            response = await self._get_page(sink, cursor)
            for raw in response.get("events", []):
                events.append(LogEvent(
                    message=raw.get("message", ""),
                    timestamp=raw.get("timestamp"),
                ))

            next_cursor = response.get("nextForwardToken") or cursor
            if next_cursor == cursor:
                break
            cursor = next_cursor
        else:
            logger.debug(f"Stopped paging {sink} after {MAX_PAGES_PER_BATCH} pages")

        return events, cursor
