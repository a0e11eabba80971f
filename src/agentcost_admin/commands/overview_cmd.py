"""CLI commands for the platform overview."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from agentcost_admin.client import AdminApiClient
from agentcost_admin.config import get_settings
from agentcost_admin.services.overview import OverviewService
from agentcost_admin.storage import FileTokenStore
from agentcost_admin.utils.errors import AdminError, handle_error
from agentcost_admin.utils.output import OutputFormat, print_output
from agentcost_admin.utils.runner import run_with_client

console = Console(stderr=True)
app = typer.Typer(name="overview", help="Platform-wide totals.")


def _build_client(verbose: bool = False) -> tuple[AdminApiClient, OverviewService]:
    settings = get_settings()
    client = AdminApiClient(settings, FileTokenStore(settings.session_path), verbose=verbose)
    return client, OverviewService(client)


@app.command("stats")
def stats(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Users, projects, events, tokens and cost totals."""
    client, service = _build_client(verbose)
    try:
        result = run_with_client(client, service.stats)
        print_output(result, output, title="Platform Stats")
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("timeseries")
def timeseries(
    range: Annotated[str, typer.Option("--range", help="7d, 30d or 90d")] = "30d",
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Daily events, cost and tokens."""
    client, service = _build_client(verbose)
    try:
        points = run_with_client(client, lambda: service.timeseries(range))
        print_output(points, output, columns=["date", "events", "tokens", "cost"], title=f"Platform Activity ({range})")
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)
