"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _beacon_endpoints(settings: AppSettings) -> dict[str, str]:
    return {
        "ucsc": settings.ucsc_base_url,
        "ncbi": settings.ncbi_base_url,
        "cafe-variome": settings.cafe_variome_base_url,
        "kaviar": settings.kaviar_base_url,
    }


async def _check_http(client: httpx.AsyncClient, url: str) -> tuple[bool, str]:
    try:
        response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


async def _check_endpoints(settings: AppSettings) -> dict[str, tuple[bool, str]]:
    endpoints = _beacon_endpoints(settings)
    async with build_async_client(settings) as client:
        results = await asyncio.gather(*(_check_http(client, url) for url in endpoints.values()))
    return dict(zip(endpoints, results))


@app.command()
def run() -> None:
    """Run baseline diagnostics (config + beacon reachability)."""

    settings = AppSettings()

    table = Table(title="Beacon Aggregator Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Query deadline", "OK", f"{settings.request_deadline_seconds:g}s")
    table.add_row("Max concurrency", "OK", str(settings.max_concurrency))

    # Reachability only: any HTTP status means the host answered.
    for provider, (ok, detail) in asyncio.run(_check_endpoints(settings)).items():
        table.add_row(f"Endpoint {provider}", "OK" if ok else "FAIL", detail)

    _console.print(table)
