"""Operaciones sobre jobs (map/reduce) del servicio.

Todas las rutas cuelgan de `/<account>/jobs`. La ejecución del job ocurre
por completo en el servidor; aquí solo se traducen operaciones a peticiones
firmadas a través de `RequestExecutor`.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from adapters.request_executor import ExecutedResponse, RequestExecutor, ResponseStream
from core.domain.models import (
    AddJobInputsInput,
    CancelJobInput,
    CreateJobInput,
    EndJobInputInput,
    GetJobFailuresInput,
    GetJobInput,
    GetJobInputInput,
    GetJobOutputInput,
    Job,
    JobSummary,
    ListJobsInput,
)
from core.domain.requests import RawRequestInput, RequestInput
from core.errors import ConfigurationError, DecodeError

RESULT_SET_SIZE_HEADER = "Result-Set-Size"


@dataclass
class CreateJobOutput:
    job_id: str


@dataclass
class GetJobOutput:
    job: Job


@dataclass
class ListJobsOutput:
    jobs: list[JobSummary]
    result_set_size: int


@dataclass
class JobItemsOutput:
    """Listado línea a línea (inputs, outputs o fallos) de un job.

    `items` es un stream abierto: el llamador debe cerrarlo.
    """

    items: ResponseStream
    result_set_size: int


def parse_result_set_size(headers: httpx.Headers) -> int:
    raw = headers.get(RESULT_SET_SIZE_HEADER)
    if raw is None or not raw.strip():
        return 0
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise DecodeError(f"Error parsing {RESULT_SET_SIZE_HEADER} header {raw!r}") from exc
    if value < 0:
        raise DecodeError(f"Error parsing {RESULT_SET_SIZE_HEADER} header {raw!r}")
    return value


class JobsClient:
    """Cliente de la API de jobs para una cuenta."""

    def __init__(self, executor: RequestExecutor, account_name: str) -> None:
        if not account_name:
            raise ConfigurationError("An account name is required for job operations")
        self._executor = executor
        self._account_name = account_name

    def _jobs_path(self, *parts: str) -> str:
        return "/".join((f"/{self._account_name}/jobs", *parts))

    def _live_path(self, job_id: str, *parts: str) -> str:
        return self._jobs_path(job_id, "live", *parts)

    def _execute_and_close(self, descriptor: RequestInput | RawRequestInput) -> ExecutedResponse:
        result = self._executor.execute(descriptor)
        result.body.close()
        return result

    def create(self, params: CreateJobInput) -> CreateJobOutput:
        """Crea un job; el id sale del último segmento de `Location`."""

        result = self._execute_and_close(
            RequestInput(method="POST", path=self._jobs_path(), body=params)
        )

        location = result.headers.get("Location")
        if not location:
            raise DecodeError(
                "Error creating job: response has no Location header",
                status_code=result.status_code,
            )
        return CreateJobOutput(job_id=location.rstrip("/").rsplit("/", 1)[-1])

    def add_inputs(self, params: AddJobInputsInput) -> None:
        """Envía rutas de objetos como input (texto plano, una por línea)."""

        body = "\n".join(params.object_paths).encode("utf-8")
        self._execute_and_close(
            RawRequestInput(
                method="POST",
                path=self._live_path(params.job_id, "in"),
                headers={"Content-Type": "text/plain"},
                body=body,
            )
        )

    def end_input(self, params: EndJobInputInput) -> None:
        self._execute_and_close(
            RequestInput(method="POST", path=self._live_path(params.job_id, "in", "end"))
        )

    def cancel(self, params: CancelJobInput) -> None:
        self._execute_and_close(
            RequestInput(method="POST", path=self._live_path(params.job_id, "cancel"))
        )

    def get(self, params: GetJobInput) -> GetJobOutput:
        result = self._executor.execute(
            RequestInput(method="GET", path=self._live_path(params.job_id, "status"))
        )
        with result.body as body:
            raw = body.read()

        try:
            job = Job.model_validate_json(raw)
        except ValidationError as exc:
            raise DecodeError(
                f"Error decoding get job response: {exc}",
                status_code=result.status_code,
            ) from exc
        return GetJobOutput(job=job)

    def list(self, params: ListJobsInput | None = None) -> ListJobsOutput:
        """Lista los jobs de la cuenta (NDJSON, una entrada por línea)."""

        params = params or ListJobsInput()
        result = self._executor.execute(
            RequestInput(method="GET", path=self._jobs_path(), query=params.to_query())
        )

        jobs: list[JobSummary] = []
        with result.body as body:
            for line in body.iter_lines():
                if not line.strip():
                    continue
                try:
                    jobs.append(JobSummary.model_validate_json(line))
                except ValidationError as exc:
                    raise DecodeError(
                        f"Error decoding job listing entry {line!r}: {exc}",
                        status_code=result.status_code,
                    ) from exc

        return ListJobsOutput(
            jobs=jobs,
            result_set_size=parse_result_set_size(result.headers),
        )

    def _items(self, job_id: str, *parts: str) -> JobItemsOutput:
        result = self._executor.execute(
            RequestInput(method="GET", path=self._live_path(job_id, *parts))
        )
        try:
            size = parse_result_set_size(result.headers)
        except DecodeError:
            result.body.close()
            raise
        return JobItemsOutput(items=result.body, result_set_size=size)

    def get_input(self, params: GetJobInputInput) -> JobItemsOutput:
        return self._items(params.job_id, "in")

    def get_output(self, params: GetJobOutputInput) -> JobItemsOutput:
        return self._items(params.job_id, "out")

    def get_failures(self, params: GetJobFailuresInput) -> JobItemsOutput:
        return self._items(params.job_id, "fail")
