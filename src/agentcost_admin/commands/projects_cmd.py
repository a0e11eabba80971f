"""CLI commands for project and API key management."""

from __future__ import annotations

from typing import Annotated, Any, Awaitable, Callable

import typer
from rich.console import Console

from agentcost_admin.client import AdminApiClient
from agentcost_admin.config import get_settings
from agentcost_admin.services.projects import ProjectService
from agentcost_admin.storage import FileTokenStore
from agentcost_admin.utils.errors import AdminError, handle_error
from agentcost_admin.utils.output import OutputFormat, print_output
from agentcost_admin.utils.runner import run_with_client

console = Console(stderr=True)
app = typer.Typer(name="projects", help="Manage projects and their API keys.")

LIST_COLUMNS = ["id", "name", "is_active", "key_prefix", "owner_email", "event_count", "last_event_at"]


def _build_client(verbose: bool = False) -> tuple[AdminApiClient, ProjectService]:
    settings = get_settings()
    client = AdminApiClient(settings, FileTokenStore(settings.session_path), verbose=verbose)
    return client, ProjectService(client)


def _execute(output: OutputFormat, verbose: bool, title: str, call: Callable[[ProjectService], Awaitable[Any]], columns: list[str] | None = None) -> None:
    client, service = _build_client(verbose)
    try:
        result = run_with_client(client, lambda: call(service))
        print_output(result, output, columns=columns, title=title)
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("list")
def list_projects(
    search: Annotated[str | None, typer.Option("--search", "-s", help="Match project name")] = None,
    active: Annotated[bool | None, typer.Option("--active/--inactive", help="Filter by active flag")] = None,
    limit: Annotated[int, typer.Option("--limit", "-l")] = 50,
    offset: Annotated[int, typer.Option("--offset")] = 0,
    all_pages: Annotated[bool, typer.Option("--all", help="Fetch every page")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """List projects."""
    if all_pages:
        _execute(output, verbose, "Projects",
                 lambda s: s.list_all(search=search, is_active=active), columns=LIST_COLUMNS)
        return
    _execute(output, verbose, "Projects",
             lambda s: s.list(search=search, is_active=active, limit=limit, offset=offset),
             columns=LIST_COLUMNS)


@app.command("show")
def show_project(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Show a project with owner, members and usage."""
    _execute(output, verbose, f"Project {project_id}", lambda s: s.get(project_id))


@app.command("enable")
def enable_project(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Re-enable a project so its key is accepted again."""
    _execute(output, verbose, "Project Enabled", lambda s: s.set_active(project_id, True))


@app.command("disable")
def disable_project(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Disable a project. Ingestion with its key is rejected."""
    _execute(output, verbose, "Project Disabled", lambda s: s.set_active(project_id, False))


@app.command("rotate-key")
def rotate_key(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show what would happen without executing")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Issue a new API key; the current key stops working immediately."""
    if dry_run:
        console.print(f"[yellow]DRY RUN:[/yellow] Would rotate the API key of project {project_id}")
        return
    _execute(output, verbose, "Key Rotated", lambda s: s.rotate_key(project_id))


@app.command("revoke-key")
def revoke_key(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show what would happen without executing")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Revoke the project's API key without issuing a replacement."""
    if dry_run:
        console.print(f"[yellow]DRY RUN:[/yellow] Would revoke the API key of project {project_id}")
        return
    _execute(output, verbose, "Key Revoked", lambda s: s.revoke_key(project_id))
