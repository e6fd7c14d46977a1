"""
Submission of build start requests.
"""

import logging

from ..models.job import JobHandle, JobRequest
from ..services.base import BuildService

logger = logging.getLogger(__name__)


class JobLauncher:
    """
    Starts one build through the build service.

    Submission is attempted exactly once; a SubmissionError from the
    service ends the run.
    """

    def __init__(self, build_service: BuildService):
        self.build_service = build_service

    async def launch(self, request: JobRequest) -> JobHandle:
        logger.debug(
            f"Submitting build for {request.project_name} "
            f"({len(request.env)} env overrides, no_artifacts={request.no_artifacts})"
        )
        handle = await self.build_service.start_job(request)
        logger.info(f"Started build {handle}")
        return handle
