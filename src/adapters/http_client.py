"""Wrapper de httpx y construcción de peticiones.

- `build_http_client` estandariza timeouts y headers del transporte.
- `build_request` convierte un descriptor (`RequestInput` / `RawRequestInput`)
  en un `httpx.Request` listo para firmar.

El transporte se puede sustituir (p.ej. `httpx.MockTransport`) en tests.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

import httpx
from pydantic import BaseModel

from core.config import ClientSettings
from core.domain.requests import HeadersInput, RawRequestInput, RequestInput
from core.errors import ConfigurationError, EncodingError

JSON_CONTENT_TYPE = "application/json"


def build_http_client(
    settings: ClientSettings,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con los defaults del cliente.

    Las redirecciones no se siguen: un 3xx es un fallo más para el ejecutor.
    """

    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers={"User-Agent": settings.user_agent},
        transport=transport,
    )


def resolve_endpoint(base_url: str, path: str) -> httpx.URL:
    """Combina la URL base configurada con el path del descriptor.

    El path del descriptor reemplaza por completo el de la URL base.
    """

    try:
        endpoint = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ConfigurationError(f"Error parsing MANTA_URL: {exc}") from exc

    if endpoint.scheme not in ("http", "https") or not endpoint.host:
        raise ConfigurationError(
            f"Error parsing MANTA_URL: {base_url!r} is not an absolute http(s) URL"
        )

    if not path.startswith("/"):
        path = "/" + path
    try:
        return endpoint.copy_with(path=path)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f"Error building request URL for {path!r}: {exc}") from exc


def encode_json_body(body: Any) -> bytes:
    """Serializa `body` como JSON indentado (4 espacios)."""

    try:
        if isinstance(body, BaseModel):
            body = body.model_dump(mode="json", by_alias=True, exclude_none=True)
        return json.dumps(body, indent=4, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"Error encoding request body: {exc}") from exc


def _header_items(headers: HeadersInput | None) -> list[tuple[str, str]]:
    if not headers:
        return []
    pairs = headers.items() if isinstance(headers, Mapping) else headers
    out: list[tuple[str, str]] = []
    # Un header con varios valores se envía con todos ellos.
    for key, value in pairs:
        if isinstance(value, str):
            out.append((key, value))
        else:
            out.extend((key, str(v)) for v in value)
    return out


def merge_headers(
    defaults: Mapping[str, str],
    caller: HeadersInput | None,
) -> httpx.Headers:
    """Mezcla headers por defecto con los del llamador.

    Un header del llamador reemplaza al default del mismo nombre (sin
    distinguir mayúsculas); si trae varios valores, se envían todos.
    """

    merged = httpx.Headers(defaults)
    items = _header_items(caller)
    for key in {k.lower() for k, _ in items}:
        if key in merged:
            del merged[key]
    return httpx.Headers(list(merged.multi_items()) + items)


def build_request(
    client: httpx.Client,
    base_url: str,
    descriptor: RequestInput | RawRequestInput,
) -> httpx.Request:
    """Construye el `httpx.Request` saliente para un descriptor."""

    url = resolve_endpoint(base_url, descriptor.path)

    defaults: dict[str, str] = {}
    content: Any = None
    if isinstance(descriptor, RawRequestInput):
        content = descriptor.body
    elif descriptor.body is not None:
        content = encode_json_body(descriptor.body)
        defaults["Content-Type"] = JSON_CONTENT_TYPE

    headers = merge_headers(defaults, descriptor.headers)

    return client.build_request(
        descriptor.method.upper(),
        url,
        params=descriptor.query or None,
        headers=headers,
        content=content,
    )
