"""CLI commands for system health."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from agentcost_admin.client import AdminApiClient
from agentcost_admin.config import get_settings
from agentcost_admin.services.system import SystemService
from agentcost_admin.storage import FileTokenStore
from agentcost_admin.utils.errors import AdminError, handle_error
from agentcost_admin.utils.output import OutputFormat, print_output
from agentcost_admin.utils.runner import run_with_client

console = Console(stderr=True)
app = typer.Typer(name="system", help="Backend health and ingestion.")


def _build_client(verbose: bool = False) -> tuple[AdminApiClient, SystemService]:
    settings = get_settings()
    client = AdminApiClient(settings, FileTokenStore(settings.session_path), verbose=verbose)
    return client, SystemService(client)


@app.command("health")
def health(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Database, ingestion and pricing health."""
    client, service = _build_client(verbose)
    try:
        result = run_with_client(client, service.health)
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)

    status = result.get("status", "unknown")
    style = "green" if status == "healthy" else "yellow"
    console.print(f"Status: [{style}]{status}[/{style}]")
    print_output(result, output, title="System Health")


@app.command("ingestion")
def ingestion(
    range: Annotated[str, typer.Option("--range", help="24h, 7d or 30d")] = "24h",
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Ingested, succeeded and failed events per bucket."""
    client, service = _build_client(verbose)
    try:
        stats = run_with_client(client, lambda: service.ingestion_stats(range))
        print_output(stats, output, columns=["date", "total", "success", "failed"], title=f"Ingestion ({range})")
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)
