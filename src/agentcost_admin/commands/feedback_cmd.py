"""CLI commands for feedback triage."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from agentcost_admin.client import AdminApiClient
from agentcost_admin.config import get_settings
from agentcost_admin.models.feedback import FeedbackPriority, FeedbackStatus, UpdateFeedbackRequest
from agentcost_admin.services.feedback import FeedbackService
from agentcost_admin.storage import FileTokenStore
from agentcost_admin.utils.errors import AdminError, handle_error
from agentcost_admin.utils.output import OutputFormat, print_output
from agentcost_admin.utils.runner import run_with_client

console = Console(stderr=True)
app = typer.Typer(name="feedback", help="Triage and respond to user feedback.")

LIST_COLUMNS = ["id", "type", "title", "status", "priority", "upvotes", "user_email", "created_at"]


def _build_client(verbose: bool = False) -> tuple[AdminApiClient, FeedbackService]:
    settings = get_settings()
    client = AdminApiClient(settings, FileTokenStore(settings.session_path), verbose=verbose)
    return client, FeedbackService(client)


@app.command("list")
def list_feedback(
    status: Annotated[FeedbackStatus | None, typer.Option("--status")] = None,
    priority: Annotated[FeedbackPriority | None, typer.Option("--priority")] = None,
    type: Annotated[str | None, typer.Option("--type", help="feature_request, bug_report, model_request, ...")] = None,
    search: Annotated[str | None, typer.Option("--search", "-s")] = None,
    limit: Annotated[int, typer.Option("--limit", "-l")] = 50,
    offset: Annotated[int, typer.Option("--offset")] = 0,
    all_pages: Annotated[bool, typer.Option("--all", help="Fetch every page")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """List feedback."""
    filters = {
        "status": status.value if status else None,
        "priority": priority.value if priority else None,
        "type": type,
        "search": search,
    }
    client, service = _build_client(verbose)
    try:
        if all_pages:
            result = run_with_client(client, lambda: service.list_all(**filters))
            console.print(f"[dim]Found {len(result)} feedback items[/dim]")
        else:
            result = run_with_client(client, lambda: service.list(limit=limit, offset=offset, **filters))
        print_output(result, output, columns=LIST_COLUMNS, title="Feedback")
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("show")
def show_feedback(
    feedback_id: Annotated[str, typer.Argument(help="Feedback ID")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Show a feedback item with comments and history."""
    client, service = _build_client(verbose)
    try:
        result = run_with_client(client, lambda: service.get(feedback_id))
        print_output(result, output, title=f"Feedback {feedback_id}")
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("update")
def update_feedback(
    feedback_id: Annotated[str, typer.Argument(help="Feedback ID")],
    status: Annotated[FeedbackStatus | None, typer.Option("--status")] = None,
    priority: Annotated[FeedbackPriority | None, typer.Option("--priority")] = None,
    response: Annotated[str | None, typer.Option("--response", "-r", help="Admin response shown to the user")] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show what would be sent without executing")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Change status or priority, or respond to the submitter."""
    request = UpdateFeedbackRequest(status=status, priority=priority, admin_response=response)
    payload = request.model_dump(mode="json", exclude_none=True)
    if not payload:
        console.print("[red]Nothing to update:[/red] pass --status, --priority or --response.")
        raise typer.Exit(2)
    if dry_run:
        console.print("[yellow]DRY RUN:[/yellow] Would update feedback:")
        print_output(payload, output, title="Feedback Update [DRY RUN]")
        return

    client, service = _build_client(verbose)
    try:
        result = run_with_client(client, lambda: service.update(feedback_id, request))
        print_output(result, output, title="Feedback Updated")
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)
