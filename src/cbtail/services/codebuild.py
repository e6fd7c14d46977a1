"""
AWS CodeBuild implementation of the build service.

boto3 clients are synchronous, so every call runs in a thread pool and is
awaited from the event loop.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..models.job import JobHandle, JobRecord, JobRequest, JobStatus, LogSinkLocation
from ..validation import BuildServiceError, SubmissionError, ErrorSeverity, handle_error
from .base import BuildService

logger = logging.getLogger(__name__)


def build_start_params(request: JobRequest) -> Dict[str, Any]:
    """
    Translate a JobRequest into StartBuild keyword arguments.

    Args:
        request: The build to start

    Returns:
        Keyword arguments for `codebuild.start_build`
    """
    params: Dict[str, Any] = {
        "projectName": request.project_name,
        "environmentVariablesOverride": [],
    }

    for env in request.env:
        logger.debug(f"Setting env {env.name} for this build")
        params["environmentVariablesOverride"].append(
            {"name": env.name, "value": env.value, "type": env.type}
        )

    if request.no_artifacts:
        logger.debug("Disabling artifacts for this build")
        params["artifactsOverride"] = {"type": "NO_ARTIFACTS"}

    if request.source_type:
        logger.debug(f"Setting source type of {request.source_type!r} for this build")
        params["sourceTypeOverride"] = request.source_type

    if request.source_location:
        logger.debug(f"Setting source location of {request.source_location!r} for this build")
        params["sourceLocationOverride"] = request.source_location

    return params


def parse_build(build: Dict[str, Any]) -> JobRecord:
    """Convert one entry of a BatchGetBuilds response into a JobRecord."""
    logs = build.get("logs") or {}
    group_name = logs.get("groupName")
    stream_name = logs.get("streamName")
    log_sink = None
    if group_name and stream_name:
        log_sink = LogSinkLocation(group_name=group_name, stream_name=stream_name)

    return JobRecord(
        build_id=build["id"],
        complete=bool(build.get("buildComplete", False)),
        status=JobStatus.parse(build.get("buildStatus")),
        log_sink=log_sink,
    )


class CodeBuildService(BuildService):
    """
    Build service backed by a boto3 `codebuild` client.

    The client is created once and shared by every caller.
    """

    def __init__(self, client: Any, executor: Optional[ThreadPoolExecutor] = None):
        """
        Args:
            client: A boto3 CodeBuild client
            executor: Thread pool for the blocking calls; the loop's default
                      executor is used when None
        """
        self.client = client
        self.executor = executor

    async def _call(self, func, **kwargs) -> Dict[str, Any]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, partial(func, **kwargs))

    async def start_job(self, request: JobRequest) -> JobHandle:
        params = build_start_params(request)
        logger.info(f"Creating a build for {request.project_name}")
        try:
            response = await self._call(self.client.start_build, **params)
        except (ClientError, BotoCoreError) as e:
            handle_error(
                error=e,
                context=f"starting build for project {request.project_name}",
                severity=ErrorSeverity.DEBUG,
                reraise=False,
                logger=logger
            )
            raise SubmissionError(f"Failed to start build for {request.project_name}: {e}") from e

        build_id = response["build"]["id"]
        logger.info(f"Build {build_id} started")
        return JobHandle(build_id=build_id)

    async def fetch_job_records(self, handle: JobHandle) -> List[JobRecord]:
        try:
            response = await self._call(self.client.batch_get_builds, ids=[handle.build_id])
        except (ClientError, BotoCoreError) as e:
            raise BuildServiceError(f"Failed to fetch build {handle.build_id}: {e}") from e

        return [parse_build(build) for build in response.get("builds", [])]
