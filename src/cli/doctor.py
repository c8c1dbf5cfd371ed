"""Doctor command for configuration diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_http_client, resolve_endpoint
from adapters.signers import PrivateKeySigner
from core.config import ClientSettings
from core.errors import ConfigurationError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_endpoint(settings: ClientSettings) -> tuple[bool, str]:
    try:
        url = resolve_endpoint(settings.manta_url, "/")
    except ConfigurationError as exc:
        return False, str(exc)
    return True, str(url)


def _check_key(settings: ClientSettings) -> tuple[bool, str]:
    if settings.key_file is None:
        return False, "SDC_KEY_FILE is not set"
    try:
        signer = PrivateKeySigner.from_key_file(
            settings.key_file,
            key_id=settings.key_id,
            account_name=settings.account_name,
        )
    except ConfigurationError as exc:
        return False, str(exc)
    return True, signer.key_path


def _check_http(settings: ClientSettings) -> tuple[bool, str]:
    """Unauthenticated GET against the endpoint; any HTTP answer counts as reachable."""

    try:
        with build_http_client(settings) as client:
            response = client.get(settings.manta_url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc)


@app.command()
def run(
    skip_network: bool = typer.Option(False, "--skip-network", help="Do not contact the endpoint."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ClientSettings()

    table = Table(title="manta-jobs Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_url, detail_url = _check_endpoint(settings)
    table.add_row("MANTA_URL", "OK" if ok_url else "FAIL", detail_url)

    table.add_row(
        "SDC_ACCOUNT",
        "OK" if settings.account_name else "MISSING",
        settings.account_name or "Required for job operations",
    )
    table.add_row(
        "SDC_KEY_ID",
        "OK" if settings.key_id else "MISSING",
        settings.key_id or "Fingerprint of the registered public key",
    )

    ok_key, detail_key = _check_key(settings)
    table.add_row("SDC_KEY_FILE", "OK" if ok_key else "FAIL", detail_key)

    ok_http = True
    if ok_url and not skip_network:
        ok_http, detail_http = _check_http(settings)
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not (ok_url and ok_key and ok_http and settings.account_name and settings.key_id):
        raise typer.Exit(code=1)
