"""CLI commands for the audit log."""

from __future__ import annotations

from typing import Annotated

import typer

from agentcost_admin.client import AdminApiClient
from agentcost_admin.config import get_settings
from agentcost_admin.services.audit import AuditService
from agentcost_admin.storage import FileTokenStore
from agentcost_admin.utils.errors import AdminError, handle_error
from agentcost_admin.utils.output import OutputFormat, print_output
from agentcost_admin.utils.runner import run_with_client

app = typer.Typer(name="audit", help="Audit trails.")


def _build_client(verbose: bool = False) -> tuple[AdminApiClient, AuditService]:
    settings = get_settings()
    client = AdminApiClient(settings, FileTokenStore(settings.session_path), verbose=verbose)
    return client, AuditService(client)


@app.command("log")
def feedback_log(
    limit: Annotated[int, typer.Option("--limit", "-l")] = 50,
    offset: Annotated[int, typer.Option("--offset")] = 0,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Feedback change events (basic audit log)."""
    client, service = _build_client(verbose)
    try:
        result = run_with_client(client, lambda: service.feedback_log(limit=limit, offset=offset))
        columns = ["created_at", "feedback_id", "event_type", "actor_id", "old_value", "new_value"]
        print_output(result, output, columns=columns, title="Audit Log")
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("admin-log")
def admin_log(
    action_type: Annotated[str | None, typer.Option("--action-type", "-a")] = None,
    target_type: Annotated[str | None, typer.Option("--target-type", "-t")] = None,
    admin_id: Annotated[str | None, typer.Option("--admin-id")] = None,
    limit: Annotated[int, typer.Option("--limit", "-l")] = 50,
    offset: Annotated[int, typer.Option("--offset")] = 0,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Admin actions with actor, target and IP (enhanced audit log)."""
    client, service = _build_client(verbose)
    try:
        result = run_with_client(
            client,
            lambda: service.admin_log(
                action_type=action_type, target_type=target_type, admin_id=admin_id,
                limit=limit, offset=offset,
            ),
        )
        columns = ["created_at", "admin_email", "action_type", "target_type", "target_id", "ip_address"]
        print_output(result, output, columns=columns, title="Admin Audit Log")
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)
