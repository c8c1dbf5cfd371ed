"""Decodificación de respuestas de error del servicio.

Convierte el cuerpo JSON de una respuesta no-2xx en `MantaError`. Si el
propio cuerpo no se puede decodificar se lanza `DecodeError`, distinto del
error del servicio, para no perder nunca la información del fallo.
"""

from __future__ import annotations

from pydantic import ValidationError

from core.domain.models import ServiceErrorBody
from core.errors import DecodeError, MantaError


def decode_service_error(status_code: int, raw: bytes) -> MantaError:
    """Devuelve el `MantaError` correspondiente a `raw` con `status_code` adjunto."""

    try:
        body = ServiceErrorBody.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(
            f"Error decoding error response (HTTP {status_code}): {exc}",
            status_code=status_code,
        ) from exc

    return MantaError(
        status_code,
        code=body.code,
        message=body.message,
        details=dict(body.model_extra or {}),
    )
