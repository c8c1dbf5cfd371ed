"""WordCount example: the fixed job call sequence, end to end.

The CLI delegates the whole call sequence to `run_wordcount` and only
renders what the hooks report. Every call is synchronous; the first failure
stops the sequence and is re-raised as `StepFailed` naming the step.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Sequence, TypeVar

from adapters.jobs import JobItemsOutput, ListJobsOutput
from adapters.storage_client import StorageClient
from core.domain.models import (
    AddJobInputsInput,
    CreateJobInput,
    EndJobInputInput,
    GetJobInput,
    GetJobInputInput,
    GetJobOutputInput,
    Job,
    JobPhase,
    ListJobsInput,
)
from core.errors import MantaClientError

T = TypeVar("T")

DEFAULT_BOOKS: tuple[str, ...] = (
    "treasure_island.txt",
    "moby_dick.txt",
    "huck_finn.txt",
    "dracula.txt",
)
DEFAULT_EXTRA_BOOKS: tuple[str, ...] = ("sherlock_holmes.txt",)

WORDCOUNT_PHASES: tuple[JobPhase, ...] = (
    JobPhase(type="map", exec="wc"),
    JobPhase(
        type="reduce",
        exec="awk '{ l += $1; w += $2; c += $3 } END { print l, w, c }'",
    ),
)


class StepFailed(MantaClientError):
    """Fallo de un paso concreto de la secuencia de ejemplo."""

    def __init__(self, step: str, error: MantaClientError) -> None:
        super().__init__(f"{step}: {error}")
        self.step = step
        self.error = error


@dataclass
class WordCountRequest:
    """Parameters of the example run."""

    account_name: str
    job_name: str = "WordCount"
    books: Sequence[str] = DEFAULT_BOOKS
    extra_books: Sequence[str] = DEFAULT_EXTRA_BOOKS
    wait_seconds: float = 10.0

    def object_paths(self, names: Sequence[str]) -> list[str]:
        return [f"/{self.account_name}/stor/books/{name}" for name in names]


@dataclass
class WordCountHooks:
    """Optional callbacks for UI layers."""

    job_created: Callable[[str], None] | None = None
    job_fetched: Callable[[Job], None] | None = None
    jobs_listed: Callable[[ListJobsOutput], None] | None = None
    items_listed: Callable[[str, int, list[str]], None] | None = None
    waiting: Callable[[float], None] | None = None


@dataclass
class WordCountResult:
    job_id: str
    job: Job
    jobs: ListJobsOutput
    inputs: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)


def _drain(output: JobItemsOutput) -> list[str]:
    with output.items as items:
        return [line for line in items.iter_lines() if line.strip()]


def _step(name: str, call: Callable[[], T]) -> T:
    try:
        return call()
    except MantaClientError as exc:
        raise StepFailed(name, exc) from exc


def run_wordcount(
    *,
    client: StorageClient,
    request: WordCountRequest,
    hooks: WordCountHooks | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> WordCountResult:
    hooks = hooks or WordCountHooks()
    jobs = client.jobs

    created = _step(
        "CreateJob",
        lambda: jobs.create(
            CreateJobInput(name=request.job_name, phases=list(WORDCOUNT_PHASES))
        ),
    )
    job_id = created.job_id
    if hooks.job_created:
        hooks.job_created(job_id)

    for batch in (request.books, request.extra_books):
        if not batch:
            continue
        paths = request.object_paths(batch)
        _step(
            "AddJobInputs",
            lambda paths=paths: jobs.add_inputs(
                AddJobInputsInput(job_id=job_id, object_paths=paths)
            ),
        )

    fetched = _step("GetJob", lambda: jobs.get(GetJobInput(job_id=job_id)))
    job = fetched.job
    if hooks.job_fetched:
        hooks.job_fetched(job)

    _step("EndJobInput", lambda: jobs.end_input(EndJobInputInput(job_id=job_id)))

    listed = _step("ListJobs", lambda: jobs.list(ListJobsInput()))
    if hooks.jobs_listed:
        hooks.jobs_listed(listed)

    input_items = _step("GetJobInput", lambda: jobs.get_input(GetJobInputInput(job_id=job_id)))
    inputs = _step("GetJobInput", lambda: _drain(input_items))
    if hooks.items_listed:
        hooks.items_listed("input", input_items.result_set_size, inputs)

    if request.wait_seconds > 0:
        if hooks.waiting:
            hooks.waiting(request.wait_seconds)
        sleep(request.wait_seconds)

    output_items = _step("GetJobOutput", lambda: jobs.get_output(GetJobOutputInput(job_id=job_id)))
    outputs = _step("GetJobOutput", lambda: _drain(output_items))
    if hooks.items_listed:
        hooks.items_listed("output", output_items.result_set_size, outputs)

    return WordCountResult(
        job_id=job_id,
        job=job,
        jobs=listed,
        inputs=inputs,
        outputs=outputs,
    )
