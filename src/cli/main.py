"""CLI principal (Typer).

Comandos:
- `wordcount`: ejecuta la secuencia de ejemplo (crear job, añadir inputs,
  consultar, cerrar inputs, listar, esperar, leer outputs).
- `doctor`: diagnósticos de configuración.
"""

from __future__ import annotations

import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.jobs import ListJobsOutput
from adapters.signers import PrivateKeySigner
from adapters.storage_client import StorageClient
from cli import doctor
from cli.ui_components import build_job_panel, build_jobs_table, print_banner
from core.config import ClientSettings
from core.domain.models import Job
from core.errors import ConfigurationError, MantaClientError
from core.services.wordcount_example import (
    StepFailed,
    WordCountHooks,
    WordCountRequest,
    run_wordcount,
)

app = typer.Typer(
    no_args_is_help=True,
    help="Client for the object-storage and map/reduce job service.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO; our executor already does it at DEBUG.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _build_client(settings: ClientSettings) -> StorageClient:
    if settings.key_file is None:
        raise ConfigurationError("SDC_KEY_FILE is not set")
    signer = PrivateKeySigner.from_key_file(
        settings.key_file,
        key_id=settings.key_id,
        account_name=settings.account_name,
    )
    return StorageClient(settings, signer)


def _console_hooks() -> WordCountHooks:
    def job_created(job_id: str) -> None:
        _console.print(f"Job ID: {job_id}", markup=False, highlight=False)

    def job_fetched(job: Job) -> None:
        _console.print(build_job_panel(job))

    def jobs_listed(listing: ListJobsOutput) -> None:
        _console.print(f"Number of jobs: {listing.result_set_size}", markup=False, highlight=False)
        _console.print(build_jobs_table(listing))

    def items_listed(label: str, size: int, lines: list[str]) -> None:
        _console.print(f"Result set size: {size}", markup=False, highlight=False)
        for line in lines:
            _console.print(f" - {line}", markup=False, highlight=False)

    def waiting(seconds: float) -> None:
        _console.print(f"[dim]Waiting {seconds:g}s for the job to produce output...[/dim]")

    return WordCountHooks(
        job_created=job_created,
        job_fetched=job_fetched,
        jobs_listed=jobs_listed,
        items_listed=items_listed,
        waiting=waiting,
    )


@app.command()
def wordcount(
    wait_seconds: float = typer.Option(
        10.0,
        "--wait-seconds",
        min=0,
        help="Seconds to wait before fetching the job output.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every HTTP request."),
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the welcome banner."),
) -> None:
    """Run the WordCount map/reduce example end to end."""

    _configure_logging(verbose)
    if banner:
        print_banner(_console)

    try:
        settings = ClientSettings()
        with _build_client(settings) as client:
            run_wordcount(
                client=client,
                request=WordCountRequest(
                    account_name=settings.account_name,
                    wait_seconds=wait_seconds,
                ),
                hooks=_console_hooks(),
            )
    except ValidationError as exc:
        _LOGGER.critical("Invalid configuration: %s", exc)
        raise typer.Exit(code=1) from exc
    except StepFailed as exc:
        _LOGGER.critical("%s: %s", exc.step, exc.error)
        raise typer.Exit(code=1) from exc
    except MantaClientError as exc:
        _LOGGER.critical("%s", exc)
        raise typer.Exit(code=1) from exc


def run() -> None:
    app()
