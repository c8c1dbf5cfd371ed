from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import httpx
import pytest

from adapters.request_executor import RequestExecutor
from adapters.storage_client import StorageClient
from core.config import ClientSettings

FIXED_NOW = datetime(2026, 10, 18, 7, 30, 0, tzinfo=timezone.utc)
FIXED_DATE = "Sun, 18 Oct 2026 07:30:00 GMT"

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingSigner:
    """Deterministic signer that remembers every date it was asked to sign."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def sign(self, date_header: str) -> str:
        self.calls.append(date_header)
        return f'Signature keyId="/acct/keys/test",headers="date",signature="{date_header}"'


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(
        _env_file=None,
        manta_url="https://manta.example.com",
        account_name="acct",
        key_id="test",
    )


@pytest.fixture
def signer() -> RecordingSigner:
    return RecordingSigner()


@pytest.fixture
def http_clients():
    clients: list[httpx.Client] = []

    def _make(handler: Handler) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def make_executor(settings, signer, http_clients):
    def _make(handler: Handler) -> RequestExecutor:
        return RequestExecutor(settings, signer, http_clients(handler), clock=lambda: FIXED_NOW)

    return _make


@pytest.fixture
def make_storage_client(settings, signer, http_clients):
    def _make(handler: Handler) -> StorageClient:
        return StorageClient(
            settings,
            signer,
            http_client=http_clients(handler),
            clock=lambda: FIXED_NOW,
        )

    return _make
