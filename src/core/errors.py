"""Errores tipados del cliente.

Cada fase del camino de una petición (configuración, codificación, firma,
transporte, decodificación) tiene su propio tipo; los fallos del servicio
remoto se representan con `MantaError`.
"""

from __future__ import annotations

from typing import Any


class MantaClientError(Exception):
    """Base de todos los errores que emite el cliente."""


class ConfigurationError(MantaClientError):
    """Configuración inválida (p.ej. URL base malformada)."""


class EncodingError(MantaClientError):
    """No se pudo serializar el cuerpo de la petición."""


class SigningError(MantaClientError):
    """El signer falló al producir la cabecera `Authorization`."""


class TransportError(MantaClientError):
    """Fallo de red/conexión al ejecutar la petición."""


class DecodeError(MantaClientError):
    """La respuesta (normalmente el cuerpo de error) no se pudo decodificar."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MantaError(MantaClientError):
    """Error estructurado devuelto por el servicio (status fuera de [200, 300))."""

    def __init__(
        self,
        status_code: int,
        *,
        code: str | None = None,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(str(self))

    def __str__(self) -> str:
        parts = [str(self.status_code)]
        if self.code:
            parts.append(self.code)
        if self.message:
            parts.append(self.message)
        return ": ".join(parts)

    def __repr__(self) -> str:
        return (
            f"MantaError(status_code={self.status_code!r}, "
            f"code={self.code!r}, message={self.message!r})"
        )
