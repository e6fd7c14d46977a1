"""
Remote service clients for the build runner.

- BuildService / LogService: interfaces the orchestration layer uses
- CodeBuildService / CloudWatchLogService: boto3-backed implementations
- create_services: builds one client per service for a run
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Tuple

import boto3
from botocore.config import Config

from .base import BuildService, LogService
from .cloudwatch import CloudWatchLogService
from .codebuild import CodeBuildService, build_start_params, parse_build

logger = logging.getLogger(__name__)


def create_services(
    region: Optional[str] = None,
    max_pool_connections: int = 10,
    executor: Optional[ThreadPoolExecutor] = None,
) -> Tuple[CodeBuildService, CloudWatchLogService]:
    """
    Create the CodeBuild and CloudWatch Logs services for one run.

    Args:
        region: AWS region; None lets boto3 resolve it from the environment
        max_pool_connections: HTTP connection pool size per client
        executor: Thread pool shared by both services for blocking calls
    """
    config = Config(region_name=region, max_pool_connections=max_pool_connections)
    session = boto3.session.Session()
    logger.debug(f"Creating AWS clients (region: {region or session.region_name})")
    codebuild = session.client("codebuild", config=config)
    logs = session.client("logs", config=config)
    return CodeBuildService(codebuild, executor), CloudWatchLogService(logs, executor)


__all__ = [
    "BuildService",
    "LogService",
    "CodeBuildService",
    "CloudWatchLogService",
    "build_start_params",
    "create_services",
    "parse_build",
]
