"""
Unit tests for the boto3-backed services, using botocore's Stubber.
"""

import boto3
import pytest
from botocore.stub import Stubber

from cbtail.models.job import EnvOverride, JobHandle, JobRequest, JobStatus, LogSinkLocation
from cbtail.services import CloudWatchLogService, CodeBuildService, build_start_params
from cbtail.validation import (
    BuildServiceError,
    LogServiceError,
    LogStreamNotFoundError,
    SubmissionError,
)

SINK = LogSinkLocation(group_name="/aws/codebuild/p1", stream_name="abc")


def make_client(service_name):
    return boto3.client(
        service_name,
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def codebuild():
    client = make_client("codebuild")
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


@pytest.fixture
def logs():
    client = make_client("logs")
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


def log_page(messages, token):
    return {
        "events": [
            {"timestamp": i, "message": m, "ingestionTime": i} for i, m in enumerate(messages)
        ],
        "nextForwardToken": token,
        "nextBackwardToken": "b/0",
    }


@pytest.mark.unit
class TestBuildStartParams:

    def test_minimal_request(self):
        assert build_start_params(JobRequest(project_name="p1")) == {
            "projectName": "p1",
            "environmentVariablesOverride": [],
        }

    def test_all_overrides(self):
        request = JobRequest(
            project_name="p1",
            env=(EnvOverride("A", "1"), EnvOverride("B", "two words")),
            source_type="S3",
            source_location="bucket/key.zip",
            no_artifacts=True,
        )

        params = build_start_params(request)

        assert params["environmentVariablesOverride"] == [
            {"name": "A", "value": "1", "type": "PLAINTEXT"},
            {"name": "B", "value": "two words", "type": "PLAINTEXT"},
        ]
        assert params["artifactsOverride"] == {"type": "NO_ARTIFACTS"}
        assert params["sourceTypeOverride"] == "S3"
        assert params["sourceLocationOverride"] == "bucket/key.zip"


@pytest.mark.unit
class TestCodeBuildService:

    @pytest.mark.asyncio
    async def test_start_job_returns_handle(self, codebuild):
        client, stubber = codebuild
        stubber.add_response(
            "start_build",
            {"build": {"id": "p1:1234"}},
            {
                "projectName": "p1",
                "environmentVariablesOverride": [
                    {"name": "A", "value": "1", "type": "PLAINTEXT"}
                ],
                "artifactsOverride": {"type": "NO_ARTIFACTS"},
            },
        )
        service = CodeBuildService(client)

        handle = await service.start_job(JobRequest(
            project_name="p1", env=(EnvOverride("A", "1"),), no_artifacts=True,
        ))

        assert handle == JobHandle("p1:1234")

    @pytest.mark.asyncio
    async def test_start_job_error_is_submission_error(self, codebuild):
        client, stubber = codebuild
        stubber.add_client_error(
            "start_build",
            service_error_code="ResourceNotFoundException",
            service_message="Project cannot be found",
        )
        service = CodeBuildService(client)

        with pytest.raises(SubmissionError, match="Project cannot be found"):
            await service.start_job(JobRequest(project_name="p1"))

    @pytest.mark.asyncio
    async def test_fetch_job_records_parses_builds(self, codebuild):
        client, stubber = codebuild
        stubber.add_response(
            "batch_get_builds",
            {"builds": [{
                "id": "p1:1234",
                "buildComplete": True,
                "buildStatus": "FAULT",
                "logs": {"groupName": SINK.group_name, "streamName": SINK.stream_name},
            }]},
            {"ids": ["p1:1234"]},
        )
        service = CodeBuildService(client)

        records = await service.fetch_job_records(JobHandle("p1:1234"))

        assert len(records) == 1
        assert records[0].complete
        assert records[0].status is JobStatus.FAULT
        assert records[0].log_sink == SINK

    @pytest.mark.asyncio
    async def test_fetch_without_logs_has_no_sink(self, codebuild):
        client, stubber = codebuild
        stubber.add_response(
            "batch_get_builds",
            {"builds": [{"id": "p1:1234", "buildComplete": False, "buildStatus": "IN_PROGRESS"}]},
            {"ids": ["p1:1234"]},
        )
        service = CodeBuildService(client)

        records = await service.fetch_job_records(JobHandle("p1:1234"))

        assert records[0].log_sink is None
        assert not records[0].complete

    @pytest.mark.asyncio
    async def test_fetch_unknown_build_returns_no_records(self, codebuild):
        client, stubber = codebuild
        stubber.add_response(
            "batch_get_builds",
            {"builds": [], "buildsNotFound": ["p1:missing"]},
            {"ids": ["p1:missing"]},
        )
        service = CodeBuildService(client)

        assert await service.fetch_job_records(JobHandle("p1:missing")) == []

    @pytest.mark.asyncio
    async def test_fetch_error_is_build_service_error(self, codebuild):
        client, stubber = codebuild
        stubber.add_client_error("batch_get_builds", service_error_code="ThrottlingException")
        service = CodeBuildService(client)

        with pytest.raises(BuildServiceError):
            await service.fetch_job_records(JobHandle("p1:1234"))


@pytest.mark.unit
class TestCloudWatchLogService:

    @pytest.mark.asyncio
    async def test_pages_until_token_repeats(self, logs):
        client, stubber = logs
        base = {
            "logGroupName": SINK.group_name,
            "logStreamName": SINK.stream_name,
            "startFromHead": True,
        }
        stubber.add_response("get_log_events", log_page(["a\n", "b\n"], "f/1"), base)
        stubber.add_response(
            "get_log_events", log_page(["c\n"], "f/2"), {**base, "nextToken": "f/1"}
        )
        stubber.add_response(
            "get_log_events", log_page([], "f/2"), {**base, "nextToken": "f/2"}
        )
        service = CloudWatchLogService(client)

        events, cursor = await service.fetch_log_events(SINK, None)

        assert [e.message for e in events] == ["a\n", "b\n", "c\n"]
        assert cursor == "f/2"

    @pytest.mark.asyncio
    async def test_missing_stream(self, logs):
        client, stubber = logs
        stubber.add_client_error(
            "get_log_events",
            service_error_code="ResourceNotFoundException",
            service_message="The specified log stream does not exist.",
        )
        service = CloudWatchLogService(client)

        with pytest.raises(LogStreamNotFoundError):
            await service.fetch_log_events(SINK, None)

    @pytest.mark.asyncio
    async def test_other_errors_are_log_service_errors(self, logs):
        client, stubber = logs
        stubber.add_client_error("get_log_events", service_error_code="AccessDeniedException")
        service = CloudWatchLogService(client)

        with pytest.raises(LogServiceError) as exc_info:
            await service.fetch_log_events(SINK, "f/9")

        assert not isinstance(exc_info.value, LogStreamNotFoundError)
