"""
Build execution orchestration.

The BuildOrchestrator starts a build, waits for its log stream, and then
runs a LogStreamWatcher and a JobStatusPoller as sibling tasks. Their output
is fanned into one loop with asyncio.wait: log events are printed as they
arrive, the first task error ends the run, and build completion ends the
stream. Both tasks are cancelled and awaited before the run returns, so no
service call outlives it.
"""

import asyncio
import logging
import sys
from typing import Callable, Optional

from ..models.job import JobHandle, JobRecord, LogEvent, LogSinkLocation
from ..models.results import ExecutionOutcome
from ..services.base import BuildService, LogService
from .job_polling import JobStatusPoller, LogSinkResolver
from .launcher import JobLauncher
from .log_watcher import LogStreamWatcher
from .shared_state import OrchestratorState, RunnerConfig

logger = logging.getLogger(__name__)


def print_message(event: LogEvent) -> None:
    """Write a log event to stdout as-is; CloudWatch messages carry their own newline."""
    sys.stdout.write(event.message)
    sys.stdout.flush()


class BuildOrchestrator:
    """
    Runs one build from submission to its terminal status.

    States: STARTING -> WAITING_FOR_SINK -> STREAMING -> COMPLETING -> DONE.
    Any error raised along the way moves straight to DONE and propagates
    to the caller unchanged.
    """

    def __init__(
        self,
        config: RunnerConfig,
        build_service: BuildService,
        log_service: LogService,
        printer: Optional[Callable[[LogEvent], None]] = None,
    ):
        """
        Args:
            config: Immutable parameters of the run
            build_service: Starts builds and fetches their records
            log_service: Reads log events
            printer: Receives each log event; defaults to stdout
        """
        self.config = config
        self.build_service = build_service
        self.log_service = log_service
        self.printer = printer or print_message

        self.state = OrchestratorState.STARTING
        self.handle: Optional[JobHandle] = None
        self.log_sink: Optional[LogSinkLocation] = None
        self.events_printed = 0

    def _transition(self, new_state: OrchestratorState) -> None:
        logger.debug(f"Orchestrator {self.state.value} -> {new_state.value}")
        self.state = new_state

    async def run(self) -> ExecutionOutcome:
        """
        Execute the build and return its outcome.

        Raises:
            SubmissionError: If the build could not be started
            JobLookupError: If the build disappears from the build service
            BuildServiceError, LogServiceError: On other service failures
            PollTimeoutError: If a configured max_wait elapses
        """
        try:
            self.handle = await JobLauncher(self.build_service).launch(self.config.request)

            self._transition(OrchestratorState.WAITING_FOR_SINK)
            resolver = LogSinkResolver(
                self.build_service, self.config.poll_interval, self.config.max_wait
            )
            self.log_sink = await resolver.resolve(self.handle)

            self._transition(OrchestratorState.STREAMING)
            record = await self._stream_until_complete(self.handle, self.log_sink)

            self._transition(OrchestratorState.COMPLETING)
            outcome = ExecutionOutcome.from_status(record.status)
            logger.info(outcome.message)
            return outcome
        finally:
            self._transition(OrchestratorState.DONE)

    async def _stream_until_complete(self, handle: JobHandle, sink: LogSinkLocation) -> JobRecord:
        events: asyncio.Queue = asyncio.Queue()
        watcher = LogStreamWatcher(self.log_service, sink, self.config.poll_interval)
        poller = JobStatusPoller(self.build_service, self.config.poll_interval, self.config.max_wait)

        watcher_task = asyncio.create_task(watcher.watch(events.put_nowait), name="log-watcher")
        poller_task = asyncio.create_task(poller.wait_for_completion(handle), name="status-poller")
        next_event: Optional[asyncio.Task] = None

        try:
            while True:
                if next_event is None:
                    next_event = asyncio.create_task(events.get(), name="next-log-event")

                done, _ = await asyncio.wait(
                    {next_event, watcher_task, poller_task},
                    return_when=asyncio.FIRST_COMPLETED,
                )

                # Completion takes priority over a log event that is ready
                # at the same moment.
                if poller_task in done:
                    record = poller_task.result()
                    if next_event in done:
                        self._print(next_event.result())
                    self._flush_delivered(events)
                    return record

                if watcher_task in done:
                    watcher_task.result()
                    raise RuntimeError(f"Log watcher for {sink} stopped without an error")

                self._print(next_event.result())
                next_event = None
        finally:
            await self._cancel_tasks(next_event, watcher_task, poller_task)

    def _print(self, event: LogEvent) -> None:
        self.printer(event)
        self.events_printed += 1

    def _flush_delivered(self, events: asyncio.Queue) -> None:
        """Print events that reached the queue before completion was seen."""
        while True:
            try:
                event = events.get_nowait()
            except asyncio.QueueEmpty:
                return
            self._print(event)

    @staticmethod
    async def _cancel_tasks(*tasks: Optional[asyncio.Task]) -> None:
        pending = [t for t in tasks if t is not None and not t.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
