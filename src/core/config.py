"""Configuración del cliente.

- Centraliza variables de entorno (pydantic-settings) en un único objeto.
- El objeto se construye en el borde (CLI) y se pasa explícitamente al
  ejecutor; el Core nunca lee `os.environ` por su cuenta.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = "manta-jobs python client API"


class ClientSettings(BaseSettings):
    """Configuración central del cliente de storage/jobs.

    Acepta los nombres clásicos del ecosistema (`MANTA_URL`, `SDC_ACCOUNT`,
    `SDC_KEY_ID`, `SDC_KEY_FILE`) y sus equivalentes con prefijo
    `MANTA_JOBS_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="MANTA_JOBS_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    manta_url: str = Field(
        default="",
        validation_alias=AliasChoices("manta_url", "MANTA_URL", "MANTA_JOBS_MANTA_URL"),
        description="URL base del servicio (p.ej. 'https://us-east.manta.joyent.com').",
    )
    account_name: str = Field(
        default="",
        validation_alias=AliasChoices("account_name", "SDC_ACCOUNT", "MANTA_JOBS_ACCOUNT_NAME"),
        description="Cuenta propietaria de los jobs y objetos.",
    )
    key_id: str = Field(
        default="",
        validation_alias=AliasChoices("key_id", "SDC_KEY_ID", "MANTA_JOBS_KEY_ID"),
        description="Fingerprint de la clave pública registrada en la cuenta.",
    )
    key_file: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("key_file", "SDC_KEY_FILE", "MANTA_JOBS_KEY_FILE"),
        description="Ruta local a la clave privada usada para firmar.",
    )

    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )
