"""
Command-line interface for cbtail.

This module parses the command line, loads configuration, builds the
immutable RunnerConfig and runs the BuildOrchestrator, translating its
outcome or error into the process exit code.
"""

import argparse
import asyncio
import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..config import get_config, set_config_path
from ..models.config import AppConfig
from ..models.job import JobRequest
from ..models.results import ExecutionOutcome
from ..orchestration import BuildOrchestrator, RunnerConfig, SignalHandler
from ..services import create_services
from ..validation import (
    CbtailError,
    ValidationError,
    handle_cli_error,
    merge_env_overrides,
    parse_env_override,
    read_env_file,
    validate_enum_choice,
    validate_positive_float,
    validate_project_name,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"

# Exit code for local input errors (bad options, env overrides, config).
EXIT_INPUT_ERROR = 2
# Exit code when the run is interrupted by SIGINT/SIGTERM.
EXIT_INTERRUPTED = 130

# Source types accepted by StartBuild's sourceTypeOverride.
SOURCE_TYPES = [
    "BITBUCKET",
    "CODECOMMIT",
    "CODEPIPELINE",
    "GITHUB",
    "GITHUB_ENTERPRISE",
    "GITLAB",
    "GITLAB_SELF_MANAGED",
    "NO_SOURCE",
    "S3",
]


def setup_logging(debug: bool) -> None:
    """
    Configure logging on stderr; stdout is reserved for build output.

    Without --debug only warnings and errors are shown.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    if not debug:
        return
    # botocore is very chatty at DEBUG.
    for name in ("botocore", "boto3", "urllib3"):
        logging.getLogger(name).setLevel(logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cbtail",
        description="Run a build on CodeBuild and tail the output from CloudWatch Logs.",
    )
    parser.add_argument(
        "-n",
        "--project-name",
        required=True,
        help="CodeBuild project name.",
    )
    parser.add_argument(
        "-e",
        "--env",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Additional environment for the build. May be repeated.",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        help='Additional environment from a file, one NAME="value" per line.',
    )
    parser.add_argument(
        "--no-artifacts",
        action="store_true",
        help="Disable artifacts for this build.",
    )
    parser.add_argument(
        "--source-type-override",
        help="Override the source type for this build.",
    )
    parser.add_argument(
        "--source-location-override",
        help="Override the source location for this build.",
    )
    parser.add_argument(
        "--region",
        help="AWS region. Defaults to the config file, then AWS_REGION.",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        help="Seconds between status and log polls. Defaults to the config file (10s).",
    )
    parser.add_argument(
        "--max-wait",
        type=float,
        help="Give up on any single wait after this many seconds. 0 waits forever.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config.toml. Defaults to $CBTAIL_CONFIG or conf/config.toml.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show debugging information.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def build_job_request(args: argparse.Namespace) -> JobRequest:
    """
    Build the JobRequest from parsed arguments.

    Env-file entries come first, then --env entries; for repeated names the
    last value wins.

    Raises:
        ValidationError: On an invalid project name or env override
    """
    project_name = validate_project_name(args.project_name, field_name="--project-name")

    source_type = args.source_type_override or None
    if source_type:
        source_type = validate_enum_choice(
            source_type.upper(), SOURCE_TYPES, field_name="--source-type-override"
        )

    overrides = []
    if args.env_file:
        overrides.extend(read_env_file(args.env_file))
    for entry in args.env:
        overrides.append(parse_env_override(entry))

    return JobRequest(
        project_name=project_name,
        env=merge_env_overrides(overrides),
        source_type=source_type,
        source_location=args.source_location_override or None,
        no_artifacts=args.no_artifacts,
    )


def build_runner_config(args: argparse.Namespace, app_config: AppConfig) -> RunnerConfig:
    """
    Combine command-line options with file settings into a RunnerConfig.

    Raises:
        ValidationError: If an option value is out of range
    """
    poll_interval = app_config.runner.poll_interval_seconds
    if args.poll_interval is not None:
        poll_interval = validate_positive_float(
            args.poll_interval, min_value=0.001, field_name="--poll-interval"
        )

    max_wait = app_config.runner.max_wait_seconds
    if args.max_wait is not None:
        max_wait = validate_positive_float(
            args.max_wait, min_value=0.0, field_name="--max-wait"
        ) or None

    return RunnerConfig(
        request=build_job_request(args),
        poll_interval=poll_interval,
        max_wait=max_wait,
    )


def resolve_region(args: argparse.Namespace, app_config: AppConfig) -> Optional[str]:
    return args.region or app_config.aws.region or os.environ.get("AWS_REGION") or None


async def run_build(
    runner_config: RunnerConfig,
    region: Optional[str],
    max_pool_connections: int,
) -> ExecutionOutcome:
    """
    Run one build against AWS, cancelling it cleanly on SIGINT/SIGTERM.
    """
    loop = asyncio.get_running_loop()
    signal_handler = SignalHandler(loop, asyncio.current_task())
    signal_handler.setup_signal_handlers()

    executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="cbtail-aws")
    try:
        build_service, log_service = create_services(
            region=region,
            max_pool_connections=max_pool_connections,
            executor=executor,
        )
        orchestrator = BuildOrchestrator(runner_config, build_service, log_service)
        return await orchestrator.run()
    finally:
        signal_handler.cleanup_signal_handlers()
        # Cancelled AWS calls may still be running in worker threads.
        executor.shutdown(wait=False, cancel_futures=True)


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line entry point.

    Exit codes:
        0: build succeeded (or finished with an unmapped status)
        1-4: build FAILED, FAULT, STOPPED, TIMED_OUT
        1: any other runtime error
        2: invalid input (options, env overrides, configuration)
        130: interrupted
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)

    try:
        if args.config:
            set_config_path(args.config)
        app_config = get_config()
        runner_config = build_runner_config(args, app_config)
    except (ValidationError, OSError, ValueError) as e:
        handle_cli_error(
            error=e,
            context="input validation",
            exit_code=EXIT_INPUT_ERROR,
            logger=logger,
        )

    region = resolve_region(args, app_config)

    try:
        outcome = asyncio.run(
            run_build(runner_config, region, app_config.aws.max_pool_connections)
        )
    except (asyncio.CancelledError, KeyboardInterrupt):
        logger.warning("Build watch interrupted; the remote build keeps running")
        sys.exit(EXIT_INTERRUPTED)
    except CbtailError as e:
        handle_cli_error(error=e, context="build run", exit_code=1, logger=logger)
    except Exception as e:
        handle_cli_error(
            error=e,
            context="build run",
            exit_code=1,
            include_traceback=True,
            logger=logger,
        )

    if not outcome.succeeded:
        print(outcome.message, file=sys.stderr)
        sys.exit(outcome.exit_code)


if __name__ == "__main__":
    main_cli()
