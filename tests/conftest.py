"""
Pytest configuration and shared fixtures for the cbtail test suite.

This module provides in-memory fakes of the build and log services, sample
configuration data, and helpers shared by all test modules.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import List, Optional, Sequence, Union

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cbtail.config import clear_config_cache, set_config_path  # noqa: E402
from cbtail.models.job import (  # noqa: E402
    JobHandle,
    JobRecord,
    JobRequest,
    JobStatus,
    LogEvent,
    LogSinkLocation,
)
from cbtail.services.base import BuildService, LogService  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")


# Interval used by every fake-backed run; keeps tests fast.
FAST_POLL = 0.005

BUILD_ID = "my-project:0b5c6f0e-1111-2222-3333-444455556666"
SINK = LogSinkLocation(group_name="/aws/codebuild/my-project", stream_name="0b5c6f0e")


# ============================================================================
# Service Fakes
# ============================================================================


class FakeBuildService(BuildService):
    """
    Scripted build service.

    Each fetch returns the next entry of `records`; the last entry repeats
    once the script is exhausted. An entry may be an exception to raise.
    """

    def __init__(
        self,
        records: Sequence[Union[List[JobRecord], Exception]],
        start_error: Optional[Exception] = None,
    ):
        self.records = list(records)
        self.start_error = start_error
        self.start_calls: List[JobRequest] = []
        self.fetch_calls = 0

    async def start_job(self, request: JobRequest) -> JobHandle:
        self.start_calls.append(request)
        if self.start_error is not None:
            raise self.start_error
        return JobHandle(build_id=BUILD_ID)

    async def fetch_job_records(self, handle: JobHandle) -> List[JobRecord]:
        index = min(self.fetch_calls, len(self.records) - 1)
        self.fetch_calls += 1
        entry = self.records[index]
        if isinstance(entry, Exception):
            raise entry
        return list(entry)


class FakeLogService(LogService):
    """
    Scripted log service.

    Each fetch returns the next batch of `batches`; once exhausted it
    returns no events. A batch may be an exception to raise. With
    `always_raise` every fetch raises that exception.
    """

    def __init__(
        self,
        batches: Sequence[Union[List[LogEvent], Exception]] = (),
        always_raise: Optional[Exception] = None,
    ):
        self.batches = list(batches)
        self.always_raise = always_raise
        self.cursors: List[Optional[str]] = []

    @property
    def fetch_calls(self) -> int:
        return len(self.cursors)

    async def fetch_log_events(self, sink, cursor):
        self.cursors.append(cursor)
        if self.always_raise is not None:
            raise self.always_raise
        index = len(self.cursors) - 1
        if index >= len(self.batches):
            return [], cursor
        batch = self.batches[index]
        if isinstance(batch, Exception):
            raise batch
        return list(batch), f"f/{index + 1}"


def record(complete=False, status=JobStatus.IN_PROGRESS, sink=SINK) -> JobRecord:
    """Build a JobRecord for BUILD_ID."""
    return JobRecord(build_id=BUILD_ID, complete=complete, status=status, log_sink=sink)


def events(*messages: str) -> List[LogEvent]:
    return [LogEvent(message=m, timestamp=i) for i, m in enumerate(messages)]


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def isolated_config(temp_dir):
    """Point configuration loading at an empty config file (all defaults)."""
    path = temp_dir / "config.toml"
    path.write_text("")
    set_config_path(path)
    yield temp_dir
    clear_config_cache()


@pytest.fixture
def job_request():
    return JobRequest(project_name="my-project")


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "runner": {
            "poll_interval_seconds": 2.5,
            "max_wait_seconds": 600,
        },
        "aws": {
            "region": "eu-west-1",
            "max_pool_connections": 20,
        },
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write sample_config_data to a temporary config.toml."""
    import toml

    path = temp_dir / "config.toml"
    with open(path, "w") as f:
        toml.dump(sample_config_data, f)
    return path


@pytest.fixture
def printed():
    """A printer that records messages instead of writing to stdout."""
    messages: List[str] = []

    def printer(event: LogEvent) -> None:
        messages.append(event.message)

    printer.messages = messages
    return printer


@pytest.fixture
def fakes():
    """Service fakes and record/event builders."""
    return SimpleNamespace(
        BuildService=FakeBuildService,
        LogService=FakeLogService,
        record=record,
        events=events,
        SINK=SINK,
        BUILD_ID=BUILD_ID,
        FAST_POLL=FAST_POLL,
    )
