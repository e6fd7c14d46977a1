"""
Orchestration module for running and tailing a build.

Components:
- BuildOrchestrator: Runs a build from submission to its terminal status
- JobLauncher: Submits the start request
- LogSinkResolver: Waits for the build's log stream
- LogStreamWatcher: Tails the log stream
- JobStatusPoller: Waits for build completion
- SignalHandler: Cancels the run on SIGINT/SIGTERM
"""

from .build_orchestrator import BuildOrchestrator, print_message
from .job_polling import JobRecordPoller, JobStatusPoller, LogSinkResolver
from .launcher import JobLauncher
from .log_watcher import LogStreamWatcher
from .shared_state import OrchestratorState, PollingDefaults, RunnerConfig
from .signal_handler import SignalHandler

__all__ = [
    "BuildOrchestrator",
    "JobLauncher",
    "JobRecordPoller",
    "JobStatusPoller",
    "LogSinkResolver",
    "LogStreamWatcher",
    "OrchestratorState",
    "PollingDefaults",
    "RunnerConfig",
    "SignalHandler",
    "print_message",
]
