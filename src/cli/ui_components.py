"""Componentes de UI para CLI (Rich).

Separa la presentación de jobs/listados de la lógica de comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from adapters.jobs import ListJobsOutput
from core.domain.models import Job


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("manta-jobs", style="bold cyan")
    subtitle = Text("Object storage • Map/Reduce jobs", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_job_panel(job: Job) -> Panel:
    """Panel con el estado y las estadísticas de un job."""

    body = Text()
    body.append(f"ID: {job.id}\n")
    body.append(f"Name: {job.name or '-'}\n")
    body.append(f"State: {job.state or '-'}\n")
    body.append(f"Input done: {job.input_done}\n")
    body.append(f"Cancelled: {job.cancelled}\n")
    if job.time_created:
        body.append(f"Created: {job.time_created.isoformat()}\n")
    for index, phase in enumerate(job.phases):
        body.append(f"Phase {index} ({phase.type}): {phase.exec}\n", style="dim")

    stats = job.stats
    body.append(
        f"\nStats: errors={stats.errors} outputs={stats.outputs} "
        f"retries={stats.retries} tasks={stats.tasks} tasks_done={stats.tasks_done}",
        style="bold",
    )
    return Panel(body, title=Text("Job", style="bold yellow"), border_style="yellow")


def build_jobs_table(listing: ListJobsOutput) -> Table:
    table = Table(title=f"Jobs ({listing.result_set_size})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Type", style="white")
    table.add_column("Modified", style="dim")
    for job in listing.jobs:
        table.add_row(job.id, job.type, job.mtime.isoformat() if job.mtime else "")
    return table
