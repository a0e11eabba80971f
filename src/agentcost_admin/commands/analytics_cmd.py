"""CLI commands for platform analytics."""

from __future__ import annotations

from typing import Annotated, Any, Awaitable, Callable

import typer

from agentcost_admin.client import AdminApiClient
from agentcost_admin.config import get_settings
from agentcost_admin.services.analytics import AnalyticsService
from agentcost_admin.storage import FileTokenStore
from agentcost_admin.utils.errors import AdminError, handle_error
from agentcost_admin.utils.output import OutputFormat, print_output
from agentcost_admin.utils.runner import run_with_client

app = typer.Typer(name="analytics", help="Cross-tenant usage rankings.")

RangeOption = Annotated[str, typer.Option("--range", help="7d, 30d or 90d")]
LimitOption = Annotated[int, typer.Option("--limit", "-l")]
OutputOption = Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v")]


def _build_client(verbose: bool = False) -> tuple[AdminApiClient, AnalyticsService]:
    settings = get_settings()
    client = AdminApiClient(settings, FileTokenStore(settings.session_path), verbose=verbose)
    return client, AnalyticsService(client)


def _execute(output: OutputFormat, verbose: bool, title: str, call: Callable[[AnalyticsService], Awaitable[Any]]) -> None:
    client, service = _build_client(verbose)
    try:
        result = run_with_client(client, lambda: call(service))
        print_output(result, output, title=title)
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("top-models")
def top_models(range: RangeOption = "30d", limit: LimitOption = 20,
               output: OutputOption = OutputFormat.TABLE, verbose: VerboseOption = False) -> None:
    """Most used models by calls, tokens and cost."""
    _execute(output, verbose, f"Top Models ({range})", lambda s: s.top_models(range, limit))


@app.command("top-spenders")
def top_spenders(range: RangeOption = "30d", limit: LimitOption = 20,
                 output: OutputOption = OutputFormat.TABLE, verbose: VerboseOption = False) -> None:
    """Projects ranked by cost."""
    _execute(output, verbose, f"Top Spenders ({range})", lambda s: s.top_spenders(range, limit))


@app.command("provider-growth")
def provider_growth(range: RangeOption = "30d",
                    output: OutputOption = OutputFormat.TABLE, verbose: VerboseOption = False) -> None:
    """Daily calls and cost per provider."""
    _execute(output, verbose, f"Provider Growth ({range})", lambda s: s.provider_growth(range))


@app.command("cost-per-user")
def cost_per_user(range: RangeOption = "30d",
                  output: OutputOption = OutputFormat.TABLE, verbose: VerboseOption = False) -> None:
    """Total cost, unique users and the average per user."""
    _execute(output, verbose, f"Cost per User ({range})", lambda s: s.cost_per_user(range))
