"""Ejecución autenticada de peticiones.

Flujo de cada llamada:
1. construir el `httpx.Request` a partir del descriptor;
2. fijar `date` y firmar exactamente ese valor (`Authorization`);
3. fijar `Accept` y `User-Agent`;
4. enviar en modo streaming y clasificar por status ([200, 300) es éxito).

En éxito el stream del cuerpo pasa al llamador, que debe cerrarlo. En fallo
el cuerpo se lee, se cierra la respuesta y se lanza `MantaError` (o
`DecodeError` si el cuerpo de error no es decodificable).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Callable, Iterator

import httpx

from adapters.error_decoder import decode_service_error
from adapters.http_client import build_request
from core.config import ClientSettings
from core.domain.requests import RawRequestInput, RequestInput
from core.errors import SigningError, TransportError
from core.interfaces.signer import Signer

_LOGGER = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_http_date(moment: datetime) -> str:
    """Formatea `moment` como HTTP-date (RFC 1123, siempre en GMT)."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return format_datetime(moment.astimezone(timezone.utc), usegmt=True)


class ResponseStream:
    """Cuerpo de una respuesta exitosa, aún sin leer.

    Se puede leer entero (`read`), por bloques (`iter_bytes`) o por líneas
    (`iter_lines`). Hay que cerrarlo siempre; admite `with`.
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._closed = False

    def read(self) -> bytes:
        try:
            return self._response.read()
        except httpx.HTTPError as exc:
            raise TransportError(f"Error reading HTTP response: {exc}") from exc

    def iter_bytes(self, chunk_size: int | None = None) -> Iterator[bytes]:
        try:
            yield from self._response.iter_bytes(chunk_size)
        except httpx.HTTPError as exc:
            raise TransportError(f"Error reading HTTP response: {exc}") from exc

    def iter_lines(self) -> Iterator[str]:
        """Itera las líneas del cuerpo, sin el salto de línea final."""

        try:
            yield from self._response.iter_lines()
        except httpx.HTTPError as exc:
            raise TransportError(f"Error reading HTTP response: {exc}") from exc

    def __iter__(self) -> Iterator[str]:
        return self.iter_lines()

    def close(self) -> None:
        self._response.close()
        self._closed = True

    @property
    def closed(self) -> bool:
        """`True` una vez que el llamador liberó el stream."""

        return self._closed

    def __enter__(self) -> "ResponseStream":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass
class ExecutedResponse:
    """Resultado de una petición exitosa; `body` pertenece al llamador."""

    body: ResponseStream
    headers: httpx.Headers
    status_code: int


class RequestExecutor:
    """Firma, envía y clasifica peticiones contra el servicio.

    No guarda estado mutable propio: se puede reutilizar entre hilos siempre
    que el `httpx.Client` inyectado lo permita.
    """

    def __init__(
        self,
        settings: ClientSettings,
        signer: Signer,
        client: httpx.Client,
        *,
        clock: Clock | None = None,
    ) -> None:
        self._settings = settings
        self._signer = signer
        self._client = client
        self._clock = clock or _utcnow

    def execute(self, descriptor: RequestInput | RawRequestInput) -> ExecutedResponse:
        request = build_request(self._client, self._settings.manta_url, descriptor)
        self._authorize(request)

        _LOGGER.debug("%s %s", request.method, request.url)
        response = self._send(request)
        _LOGGER.debug("%s %s -> %d", request.method, request.url, response.status_code)

        if 200 <= response.status_code < 300:
            return ExecutedResponse(
                body=ResponseStream(response),
                headers=response.headers,
                status_code=response.status_code,
            )

        try:
            raw = response.read()
        except httpx.HTTPError as exc:
            raise TransportError(f"Error reading error response: {exc}") from exc
        finally:
            response.close()

        error = decode_service_error(response.status_code, raw)
        _LOGGER.info("%s %s failed: %s", request.method, request.url, error)
        raise error

    def _authorize(self, request: httpx.Request) -> None:
        # The signature covers exactly this value.
        date_header = format_http_date(self._clock())
        request.headers["date"] = date_header

        try:
            authorization = self._signer.sign(date_header)
        except SigningError:
            raise
        except Exception as exc:
            raise SigningError(f"Error signing HTTP request: {exc}") from exc

        request.headers["Authorization"] = authorization
        request.headers["Accept"] = "*/*"
        request.headers["User-Agent"] = self._settings.user_agent

    def _send(self, request: httpx.Request) -> httpx.Response:
        try:
            return self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise TransportError(f"Error executing HTTP request: {exc}") from exc
