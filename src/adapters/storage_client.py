"""Fachada del cliente de storage/jobs.

Reúne configuración, signer, transporte y ejecutor en un único objeto
construido explícitamente (nada se lee del entorno aquí).
"""

from __future__ import annotations

import httpx

from adapters.http_client import build_http_client
from adapters.jobs import JobsClient
from adapters.request_executor import Clock, ExecutedResponse, RequestExecutor
from core.config import ClientSettings
from core.domain.requests import RawRequestInput, RequestInput
from core.interfaces.signer import Signer


class StorageClient:
    """Punto de entrada del SDK.

    Si no se inyecta un `httpx.Client`, se crea uno propio que se cierra con
    `close()` (o al salir del bloque `with`).
    """

    def __init__(
        self,
        settings: ClientSettings,
        signer: Signer,
        *,
        http_client: httpx.Client | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.settings = settings
        self._owns_client = http_client is None
        self._http_client = http_client or build_http_client(settings)
        self.executor = RequestExecutor(settings, signer, self._http_client, clock=clock)
        self._jobs: JobsClient | None = None

    @property
    def jobs(self) -> JobsClient:
        if self._jobs is None:
            self._jobs = JobsClient(self.executor, self.settings.account_name)
        return self._jobs

    def execute(self, descriptor: RequestInput | RawRequestInput) -> ExecutedResponse:
        """Ejecuta una petición arbitraria contra el servicio."""

        return self.executor.execute(descriptor)

    def close(self) -> None:
        if self._owns_client:
            self._http_client.close()

    def __enter__(self) -> "StorageClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
