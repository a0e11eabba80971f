"""CLI commands for model pricing."""

from __future__ import annotations

from typing import Annotated, Any, Awaitable, Callable

import typer
from rich.console import Console

from agentcost_admin.client import AdminApiClient
from agentcost_admin.config import get_settings
from agentcost_admin.models.pricing import PricingSource, UpdateModelPricingRequest
from agentcost_admin.services.pricing import PricingService
from agentcost_admin.storage import FileTokenStore
from agentcost_admin.utils.errors import AdminError, handle_error
from agentcost_admin.utils.output import OutputFormat, print_output
from agentcost_admin.utils.runner import run_with_client

console = Console(stderr=True)
app = typer.Typer(name="pricing", help="Inspect and maintain model pricing.")

MODEL_COLUMNS = [
    "id", "model_name", "provider", "input_price_per_1k",
    "output_price_per_1k", "is_active", "pricing_source",
]
HISTORY_COLUMNS = [
    "created_at", "source", "status", "models_created",
    "models_updated", "models_skipped", "duration_ms", "error_message",
]


def _build_client(verbose: bool = False) -> tuple[AdminApiClient, PricingService]:
    settings = get_settings()
    client = AdminApiClient(settings, FileTokenStore(settings.session_path), verbose=verbose)
    return client, PricingService(client)


def _execute(output: OutputFormat, verbose: bool, title: str, call: Callable[[PricingService], Awaitable[Any]], columns: list[str] | None = None) -> None:
    client, service = _build_client(verbose)
    try:
        result = run_with_client(client, lambda: call(service))
        print_output(result, output, columns=columns, title=title)
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("models")
def list_models(
    search: Annotated[str | None, typer.Option("--search", "-s", help="Match model name")] = None,
    provider: Annotated[str | None, typer.Option("--provider", "-p")] = None,
    source: Annotated[str | None, typer.Option("--source", help="manual, litellm or openrouter")] = None,
    limit: Annotated[int, typer.Option("--limit", "-l")] = 50,
    offset: Annotated[int, typer.Option("--offset")] = 0,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """List priced models."""
    _execute(
        output, verbose, "Model Pricing",
        lambda s: s.list_models(search=search, provider=provider, source=source, limit=limit, offset=offset),
        columns=MODEL_COLUMNS,
    )


@app.command("providers")
def list_providers(
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Model counts and average prices per provider."""
    _execute(output, verbose, "Providers", lambda s: s.list_providers())


@app.command("update")
def update_model(
    model_id: Annotated[int, typer.Argument(help="Pricing model ID")],
    input_price: Annotated[float | None, typer.Option("--input-price", min=0, help="USD per 1k input tokens")] = None,
    output_price: Annotated[float | None, typer.Option("--output-price", min=0, help="USD per 1k output tokens")] = None,
    active: Annotated[bool | None, typer.Option("--active/--inactive")] = None,
    notes: Annotated[str | None, typer.Option("--notes", help="Why the price was overridden")] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show what would be sent without executing")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Override a model's prices."""
    request = UpdateModelPricingRequest(
        input_price_per_1k=input_price,
        output_price_per_1k=output_price,
        is_active=active,
        notes=notes,
    )
    if dry_run:
        console.print("[yellow]DRY RUN:[/yellow] Would update model pricing:")
        print_output(request.model_dump(exclude_none=True), output, title="Pricing Update [DRY RUN]")
        return
    _execute(output, verbose, "Pricing Updated", lambda s: s.update_model(model_id, request))


@app.command("sync")
def sync_pricing(
    source: Annotated[PricingSource, typer.Argument(help="Upstream catalogue")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Pull prices from an upstream catalogue."""
    console.print(f"Syncing pricing from [bold]{source.value}[/bold]...", style="yellow")
    _execute(output, verbose, "Pricing Sync", lambda s: s.sync(source))


@app.command("history")
def sync_history(
    source: Annotated[str | None, typer.Option("--source")] = None,
    limit: Annotated[int, typer.Option("--limit", "-l")] = 10,
    offset: Annotated[int, typer.Option("--offset")] = 0,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Recent pricing sync runs."""
    _execute(
        output, verbose, "Sync History",
        lambda s: s.sync_history(source=source, limit=limit, offset=offset),
        columns=HISTORY_COLUMNS,
    )
