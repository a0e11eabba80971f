"""CLI commands for incidents."""

from __future__ import annotations

from typing import Annotated

import typer

from agentcost_admin.client import AdminApiClient
from agentcost_admin.config import get_settings
from agentcost_admin.services.incidents import IncidentService
from agentcost_admin.storage import FileTokenStore
from agentcost_admin.utils.errors import AdminError, handle_error
from agentcost_admin.utils.output import OutputFormat, print_output
from agentcost_admin.utils.runner import run_with_client

app = typer.Typer(name="incidents", help="Failed ingestion events and incident feedback.")


def _build_client(verbose: bool = False) -> tuple[AdminApiClient, IncidentService]:
    settings = get_settings()
    client = AdminApiClient(settings, FileTokenStore(settings.session_path), verbose=verbose)
    return client, IncidentService(client)


@app.command("events")
def failed_events(
    project_id: Annotated[str | None, typer.Option("--project-id", "-p")] = None,
    limit: Annotated[int, typer.Option("--limit", "-l")] = 50,
    offset: Annotated[int, typer.Option("--offset")] = 0,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Events that failed ingestion."""
    client, service = _build_client(verbose)
    try:
        result = run_with_client(
            client, lambda: service.failed_events(limit=limit, offset=offset, project_id=project_id),
        )
        columns = ["timestamp", "project_name", "model", "agent_name", "error"]
        print_output(result, output, columns=columns, title="Failed Events")
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("feedback")
def feedback_incidents(
    status: Annotated[str | None, typer.Option("--status")] = None,
    priority: Annotated[str | None, typer.Option("--priority")] = None,
    type: Annotated[str | None, typer.Option("--type")] = None,
    limit: Annotated[int, typer.Option("--limit", "-l")] = 50,
    offset: Annotated[int, typer.Option("--offset")] = 0,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Feedback items reported as incidents."""
    client, service = _build_client(verbose)
    try:
        result = run_with_client(
            client,
            lambda: service.feedback(status=status, priority=priority, type=type, limit=limit, offset=offset),
        )
        columns = ["id", "type", "title", "status", "priority", "user_email", "created_at"]
        print_output(result, output, columns=columns, title="Incident Feedback")
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)
