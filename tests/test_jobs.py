from __future__ import annotations

import json

import httpx
import pytest

from adapters.jobs import JobsClient, parse_result_set_size
from adapters.request_executor import ExecutedResponse, ResponseStream
from core.domain.models import (
    AddJobInputsInput,
    CancelJobInput,
    CreateJobInput,
    EndJobInputInput,
    GetJobFailuresInput,
    GetJobInput,
    GetJobOutputInput,
    JobPhase,
    ListJobsInput,
)
from core.errors import ConfigurationError, DecodeError, MantaError

JOB_STATUS = {
    "id": "7b39e12b-bb87-42a7-8c5f-deb9727fc362",
    "name": "WordCount",
    "state": "running",
    "cancelled": False,
    "inputDone": False,
    "transient": False,
    "stats": {"errors": 0, "outputs": 1, "retries": 0, "tasks": 5, "tasksDone": 4},
    "timeCreated": "2026-10-18T07:30:00.000Z",
    "timeDone": None,
    "phases": [{"type": "map", "exec": "wc"}, {"type": "reduce", "exec": "cat"}],
}


def test_create_returns_id_from_location(make_storage_client):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, headers={"Location": "/acct/jobs/abc-123"})

    client = make_storage_client(handler)
    output = client.jobs.create(
        CreateJobInput(name="WordCount", phases=[JobPhase(type="map", exec="wc")])
    )

    assert output.job_id == "abc-123"
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/acct/jobs"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {"name": "WordCount", "phases": [{"type": "map", "exec": "wc"}]}


def test_create_without_location_is_a_decode_error(make_storage_client):
    client = make_storage_client(lambda request: httpx.Response(201))

    with pytest.raises(DecodeError, match="Location"):
        client.jobs.create(CreateJobInput(phases=[JobPhase(exec="wc")]))


def test_add_inputs_posts_newline_separated_paths(make_storage_client):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    client = make_storage_client(handler)
    client.jobs.add_inputs(
        AddJobInputsInput(job_id="j1", object_paths=["/acct/stor/a.txt", "/acct/stor/b.txt"])
    )

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/acct/jobs/j1/live/in"
    assert request.headers["Content-Type"] == "text/plain"
    assert request.read() == b"/acct/stor/a.txt\n/acct/stor/b.txt"


@pytest.mark.parametrize(
    "call, path",
    [
        (lambda jobs: jobs.end_input(EndJobInputInput(job_id="j1")), "/acct/jobs/j1/live/in/end"),
        (lambda jobs: jobs.cancel(CancelJobInput(job_id="j1")), "/acct/jobs/j1/live/cancel"),
    ],
)
def test_job_control_posts(make_storage_client, call, path):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(202)

    call(make_storage_client(handler).jobs)

    assert [(r.method, r.url.path) for r in seen] == [("POST", path)]


def test_get_decodes_job_status(make_storage_client):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/acct/jobs/j1/live/status"
        return httpx.Response(200, json=JOB_STATUS)

    job = make_storage_client(handler).jobs.get(GetJobInput(job_id="j1")).job

    assert job.id == JOB_STATUS["id"]
    assert job.state == "running"
    assert job.input_done is False
    assert job.stats.tasks_done == 4
    assert job.time_created is not None and job.time_created.year == 2026
    assert job.time_done is None
    assert [phase.type for phase in job.phases] == ["map", "reduce"]


def test_get_with_malformed_status_is_a_decode_error(make_storage_client):
    client = make_storage_client(lambda request: httpx.Response(200, content=b"{not json"))

    with pytest.raises(DecodeError) as excinfo:
        client.jobs.get(GetJobInput(job_id="j1"))
    assert excinfo.value.status_code == 200


def test_list_parses_ndjson_and_result_set_size(make_storage_client):
    seen: list[httpx.Request] = []
    body = (
        b'{"name":"job-1","type":"directory","mtime":"2026-10-18T07:00:00.000Z"}\n'
        b"\n"
        b'{"name":"job-2","type":"directory","mtime":"2026-10-18T07:10:00.000Z"}\n'
    )

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=body, headers={"Result-Set-Size": "2"})

    output = make_storage_client(handler).jobs.list(ListJobsInput(limit=10, state="running"))

    assert [job.id for job in output.jobs] == ["job-1", "job-2"]
    assert output.result_set_size == 2
    assert seen[0].url.path == "/acct/jobs"
    assert seen[0].url.params["limit"] == "10"
    assert seen[0].url.params["state"] == "running"
    assert "marker" not in seen[0].url.params


def test_list_with_bad_entry_is_a_decode_error(make_storage_client):
    client = make_storage_client(lambda request: httpx.Response(200, content=b"[1, 2]\n"))

    with pytest.raises(DecodeError, match="job listing"):
        client.jobs.list()


def test_get_output_hands_open_line_stream_to_caller(make_storage_client):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/acct/jobs/j1/live/out"
        return httpx.Response(
            200,
            content=iter([b"/acct/jobs/j1/stor/reduce.0.txt\n"]),
            headers={"Result-Set-Size": "1"},
        )

    output = make_storage_client(handler).jobs.get_output(GetJobOutputInput(job_id="j1"))

    assert output.result_set_size == 1
    assert not output.items.closed
    with output.items as items:
        assert list(items.iter_lines()) == ["/acct/jobs/j1/stor/reduce.0.txt"]
    assert output.items.closed


def test_get_failures_uses_fail_listing(make_storage_client):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/acct/jobs/j1/live/fail"
        return httpx.Response(200, content=b"")

    output = make_storage_client(handler).jobs.get_failures(GetJobFailuresInput(job_id="j1"))

    with output.items as items:
        assert list(items) == []
    assert output.result_set_size == 0


def test_bad_result_set_size_closes_stream_and_fails(make_storage_client):
    client = make_storage_client(
        lambda request: httpx.Response(200, content=b"x\n", headers={"Result-Set-Size": "many"})
    )

    with pytest.raises(DecodeError, match="Result-Set-Size"):
        client.jobs.get_output(GetJobOutputInput(job_id="j1"))


def test_bad_result_set_size_releases_the_body():
    body = ResponseStream(httpx.Response(200, content=iter([b"x\n"])))

    class StubExecutor:
        def execute(self, descriptor):
            return ExecutedResponse(
                body=body,
                headers=httpx.Headers({"Result-Set-Size": "-1"}),
                status_code=200,
            )

    with pytest.raises(DecodeError):
        JobsClient(StubExecutor(), "acct").get_failures(GetJobFailuresInput(job_id="j1"))
    assert body.closed


@pytest.mark.parametrize("raw, expected", [("12", 12), (" 3 ", 3), ("", 0)])
def test_parse_result_set_size(raw, expected):
    assert parse_result_set_size(httpx.Headers({"Result-Set-Size": raw})) == expected


def test_service_errors_propagate_from_job_operations(make_storage_client):
    client = make_storage_client(
        lambda request: httpx.Response(404, json={"code": "ResourceNotFound", "message": "no such job"})
    )

    with pytest.raises(MantaError) as excinfo:
        client.jobs.get(GetJobInput(job_id="missing"))
    assert excinfo.value.status_code == 404
    assert excinfo.value.code == "ResourceNotFound"


def test_jobs_client_requires_an_account(make_executor):
    executor = make_executor(lambda request: httpx.Response(200))

    with pytest.raises(ConfigurationError):
        JobsClient(executor, "")
