"""
Signal handling for the orchestration module.

SIGINT and SIGTERM cancel the task running the build, which in turn
cancels the watcher and poller tasks at their next suspension point.
"""

import asyncio
import logging
import signal
from typing import Optional

logger = logging.getLogger(__name__)


class SignalHandler:
    """
    Cancels a running task when the process receives SIGINT or SIGTERM.

    Handlers are installed on the event loop and removed again by
    cleanup_signal_handlers().
    """

    SIGNALS = (signal.SIGINT, signal.SIGTERM)

    def __init__(self, loop: asyncio.AbstractEventLoop, task: asyncio.Task):
        self.loop = loop
        self.task = task
        self.received_signal: Optional[int] = None
        self._installed = []

    def setup_signal_handlers(self) -> None:
        """Install handlers for SIGINT and SIGTERM on the loop."""
        for signum in self.SIGNALS:
            try:
                self.loop.add_signal_handler(signum, self._handle_signal, signum)
                self._installed.append(signum)
            except (NotImplementedError, RuntimeError) as e:
                logger.warning(f"Failed to set up handler for signal {signum}: {e}")
        logger.debug(f"Signal handlers set up for {self.task.get_name()}")

    def cleanup_signal_handlers(self) -> None:
        """Remove the handlers installed by setup_signal_handlers()."""
        for signum in self._installed:
            try:
                self.loop.remove_signal_handler(signum)
            except (NotImplementedError, RuntimeError) as e:
                logger.warning(f"Failed to remove handler for signal {signum}: {e}")
        self._installed.clear()

    def _handle_signal(self, signum: int) -> None:
        if self.received_signal is not None:
            logger.warning("Shutdown already in progress. Please be patient.")
            return

        self.received_signal = signum
        logger.warning(f"Signal {signal.strsignal(signum)} received. Cancelling the build watch...")
        self.task.cancel()
