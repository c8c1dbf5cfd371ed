"""Modelos del dominio de jobs (Pydantic v2).

Describen *qué* devuelve y acepta el servicio de jobs, no *cómo* se obtiene.
Los nombres de campo en el wire son camelCase; se exponen en snake_case
mediante alias.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class JobPhase(BaseModel):
    """Una fase map o reduce de un job."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type: str = Field(
        default="map",
        pattern="^(map|reduce)$",
        description="Tipo de fase: 'map' o 'reduce'.",
    )
    exec: str = Field(
        ...,
        min_length=1,
        description="Comando shell ejecutado por cada tarea de la fase.",
    )
    init: str | None = Field(
        default=None,
        description="Comando opcional ejecutado antes de la primera tarea.",
    )
    assets: list[str] | None = Field(
        default=None,
        description="Objetos que se montan en cada contenedor de la fase.",
    )
    memory: int | None = Field(
        default=None,
        ge=1,
        description="Memoria solicitada (MB).",
    )
    disk: int | None = Field(
        default=None,
        ge=1,
        description="Disco solicitado (GB).",
    )
    count: int | None = Field(
        default=None,
        ge=1,
        description="Número de reducers (solo fases reduce).",
    )


class JobStats(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    errors: int = 0
    outputs: int = 0
    retries: int = 0
    tasks: int = 0
    tasks_done: int = Field(default=0, alias="tasksDone")


class Job(BaseModel):
    """Estado de un job tal como lo reporta `live/status`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., min_length=1, description="Identificador del job.")
    name: str = Field(default="", description="Nombre legible del job.")
    state: str = Field(default="", description="Estado: queued, running, done...")
    cancelled: bool = False
    input_done: bool = Field(default=False, alias="inputDone")
    transient: bool = False
    time_created: datetime | None = Field(default=None, alias="timeCreated")
    time_done: datetime | None = Field(default=None, alias="timeDone")
    stats: JobStats = Field(default_factory=JobStats)
    phases: list[JobPhase] = Field(default_factory=list)


class JobSummary(BaseModel):
    """Entrada del listado de jobs (una línea NDJSON del directorio `jobs`)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., min_length=1, alias="name")
    type: str = Field(default="directory")
    mtime: datetime | None = None


class CreateJobInput(BaseModel):
    """Cuerpo de creación de un job."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="", description="Nombre del job (opcional).")
    phases: list[JobPhase] = Field(..., min_length=1)


class AddJobInputsInput(BaseModel):
    job_id: str = Field(..., min_length=1)
    object_paths: list[str] = Field(default_factory=list)


class JobIdInput(BaseModel):
    """Entrada de las operaciones que solo necesitan el id del job."""

    job_id: str = Field(..., min_length=1)


class EndJobInputInput(JobIdInput):
    pass


class CancelJobInput(JobIdInput):
    pass


class GetJobInput(JobIdInput):
    pass


class GetJobInputInput(JobIdInput):
    pass


class GetJobOutputInput(JobIdInput):
    pass


class GetJobFailuresInput(JobIdInput):
    pass


class ListJobsInput(BaseModel):
    limit: int | None = Field(default=None, ge=1)
    marker: str | None = None
    state: str | None = Field(
        default=None,
        description="Filtra por estado (p.ej. 'running').",
    )

    def to_query(self) -> dict[str, Any]:
        return {k: v for k, v in self.model_dump().items() if v is not None}


class ServiceErrorBody(BaseModel):
    """Cuerpo JSON que el servicio devuelve en respuestas no-2xx."""

    model_config = ConfigDict(extra="allow")

    code: str | None = None
    message: str | None = None
