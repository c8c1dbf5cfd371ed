"""Descriptores de petición.

Representación en memoria de una petición saliente antes de serializarla.
Hay dos variantes excluyentes:
- `RequestInput`: cuerpo estructurado que se serializa a JSON.
- `RawRequestInput`: cuerpo ya codificado (bytes o stream binario) que se
  envía tal cual.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO, Any, Mapping, Sequence, Union

HeaderValue = Union[str, Sequence[str]]
HeadersInput = Union[Mapping[str, HeaderValue], Sequence[tuple[str, str]]]
QueryInput = Union[Mapping[str, Any], Sequence[tuple[str, Any]]]
RawBody = Union[bytes, IO[bytes]]


@dataclass
class RequestInput:
    """Petición con cuerpo estructurado (cualquier valor serializable o modelo Pydantic)."""

    method: str
    path: str
    query: QueryInput | None = None
    headers: HeadersInput | None = None
    body: Any | None = None


@dataclass
class RawRequestInput:
    """Petición con cuerpo pre-codificado; el llamador fija el `Content-Type`."""

    method: str
    path: str
    query: QueryInput | None = None
    headers: HeadersInput | None = None
    body: RawBody | None = None
