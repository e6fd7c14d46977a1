"""
cbtail: run a CodeBuild build and tail its CloudWatch Logs output.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Data structures and type definitions
- validation: Input validation, env override parsing and error handling
- services: CodeBuild and CloudWatch Logs clients
- orchestration: Build submission, log tailing and status polling
- cli: Command-line interface

Usage:
    From command line:
        cbtail --project-name my-project --env KEY=value

    Programmatically:
        from cbtail import BuildOrchestrator, JobRequest, RunnerConfig, create_services
        build_service, log_service = create_services(region="us-east-1")
        config = RunnerConfig(request=JobRequest(project_name="my-project"))
        outcome = await BuildOrchestrator(config, build_service, log_service).run()
"""

__version__ = "1.0.0"

from .config import clear_config_cache, get_config, set_config_path
from .models import (
    AppConfig,
    EnvOverride,
    ExecutionOutcome,
    JobHandle,
    JobRecord,
    JobRequest,
    JobStatus,
    LogEvent,
    LogSinkLocation,
)
from .orchestration import BuildOrchestrator, OrchestratorState, RunnerConfig
from .services import BuildService, LogService, create_services
from .validation import (
    BuildServiceError,
    CbtailError,
    JobLookupError,
    LogServiceError,
    LogStreamNotFoundError,
    PollTimeoutError,
    SubmissionError,
    ValidationError,
)
from .cli import main_cli

__all__ = [
    # Main interfaces
    "BuildOrchestrator",
    "RunnerConfig",
    "OrchestratorState",
    "create_services",
    "main_cli",
    "get_config",
    "set_config_path",
    "clear_config_cache",
    # Services
    "BuildService",
    "LogService",
    # Models
    "AppConfig",
    "EnvOverride",
    "ExecutionOutcome",
    "JobHandle",
    "JobRecord",
    "JobRequest",
    "JobStatus",
    "LogEvent",
    "LogSinkLocation",
    # Errors
    "BuildServiceError",
    "CbtailError",
    "JobLookupError",
    "LogServiceError",
    "LogStreamNotFoundError",
    "PollTimeoutError",
    "SubmissionError",
    "ValidationError",
]
