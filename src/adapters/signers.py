"""Signer basado en clave privada RSA (HTTP Signature sobre `date`).

La carga de la clave la hace paramiko; aquí solo se adapta la clave al
contrato `core.interfaces.signer.Signer`.
"""

from __future__ import annotations

import base64
from pathlib import Path

import paramiko

from core.errors import ConfigurationError

_SSH_ALGORITHM = "rsa-sha2-256"
_HTTP_ALGORITHM = "rsa-sha256"


class PrivateKeySigner:
    """Firma `date: <valor>` con RSA-SHA256 y arma la cabecera `Signature ...`."""

    def __init__(self, *, key_id: str, account_name: str, key: paramiko.RSAKey) -> None:
        self._key_id = key_id
        self._account_name = account_name
        self._key = key

    @classmethod
    def from_key_file(
        cls,
        path: Path,
        *,
        key_id: str,
        account_name: str,
        password: str | None = None,
    ) -> "PrivateKeySigner":
        try:
            key = paramiko.RSAKey.from_private_key_file(str(path), password=password)
        except (OSError, paramiko.SSHException) as exc:
            raise ConfigurationError(f"Couldn't load key file {path} matching {key_id}: {exc}") from exc
        return cls(key_id=key_id, account_name=account_name, key=key)

    @property
    def key_path(self) -> str:
        return f"/{self._account_name}/keys/{self._key_id}"

    def sign(self, date_header: str) -> str:
        signing_string = f"date: {date_header}".encode("utf-8")
        message = self._key.sign_ssh_data(signing_string, algorithm=_SSH_ALGORITHM)
        message.rewind()
        message.get_text()  # algorithm name
        signature = base64.b64encode(message.get_binary()).decode("ascii")
        return (
            f'Signature keyId="{self.key_path}",'
            f'algorithm="{_HTTP_ALGORITHM}",'
            f'headers="date",'
            f'signature="{signature}"'
        )
