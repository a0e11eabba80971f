"""CLI commands for user management."""

from __future__ import annotations

from typing import Annotated, Any, Awaitable, Callable

import typer
from rich.console import Console

from agentcost_admin.client import AdminApiClient
from agentcost_admin.config import get_settings
from agentcost_admin.services.users import UserService
from agentcost_admin.storage import FileTokenStore
from agentcost_admin.utils.errors import AdminError, handle_error
from agentcost_admin.utils.output import OutputFormat, print_output
from agentcost_admin.utils.runner import run_with_client

console = Console(stderr=True)
app = typer.Typer(name="users", help="List, inspect and moderate platform users.")

LIST_COLUMNS = ["id", "email", "name", "is_active", "is_superuser", "created_at", "last_login_at"]


def _build_client(verbose: bool = False) -> tuple[AdminApiClient, UserService]:
    settings = get_settings()
    client = AdminApiClient(settings, FileTokenStore(settings.session_path), verbose=verbose)
    return client, UserService(client)


def _run(verbose: bool, call: Callable[[UserService], Awaitable[Any]]) -> Any:
    client, service = _build_client(verbose)
    return run_with_client(client, lambda: call(service))


@app.command("list")
def list_users(
    search: Annotated[str | None, typer.Option("--search", "-s", help="Match email or name")] = None,
    active: Annotated[bool | None, typer.Option("--active/--inactive", help="Filter by active flag")] = None,
    superuser: Annotated[bool | None, typer.Option("--superuser/--regular", help="Filter by superuser flag")] = None,
    limit: Annotated[int, typer.Option("--limit", "-l")] = 50,
    offset: Annotated[int, typer.Option("--offset")] = 0,
    sort: Annotated[str | None, typer.Option("--sort", help="Sort field, e.g. created_at")] = None,
    order: Annotated[str | None, typer.Option("--order", help="asc or desc")] = None,
    all_pages: Annotated[bool, typer.Option("--all", help="Fetch every page")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """List users."""
    filters = {
        "search": search, "is_active": active, "is_superuser": superuser,
        "sort": sort, "order": order,
    }
    try:
        if all_pages:
            result = _run(verbose, lambda s: s.list_all(**filters))
            console.print(f"[dim]Found {len(result)} users[/dim]")
        else:
            result = _run(verbose, lambda s: s.list(limit=limit, offset=offset, **filters))
        print_output(result, output, columns=LIST_COLUMNS, title="Users")
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("show")
def show_user(
    user_id: Annotated[str, typer.Argument(help="User ID")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Show a user with projects, memberships and usage."""
    try:
        user = _run(verbose, lambda s: s.get(user_id))
        print_output(user, output, title=f"User {user_id}")
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)


def _mutate(output: OutputFormat, verbose: bool, title: str, call: Callable[[UserService], Awaitable[Any]]) -> None:
    try:
        result = _run(verbose, call)
        print_output(result, output, title=title)
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("enable")
def enable_user(
    user_id: Annotated[str, typer.Argument(help="User ID")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Re-enable a disabled user."""
    _mutate(output, verbose, "User Enabled", lambda s: s.set_active(user_id, True))


@app.command("disable")
def disable_user(
    user_id: Annotated[str, typer.Argument(help="User ID")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Disable a user. Their API calls and sign-ins are rejected."""
    _mutate(output, verbose, "User Disabled", lambda s: s.set_active(user_id, False))


@app.command("promote")
def promote_user(
    user_id: Annotated[str, typer.Argument(help="User ID")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Grant superuser (admin console) access."""
    _mutate(output, verbose, "User Promoted", lambda s: s.set_superuser(user_id, True))


@app.command("demote")
def demote_user(
    user_id: Annotated[str, typer.Argument(help="User ID")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Remove superuser access."""
    _mutate(output, verbose, "User Demoted", lambda s: s.set_superuser(user_id, False))


@app.command("revoke-sessions")
def revoke_sessions(
    user_id: Annotated[str, typer.Argument(help="User ID")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Sign the user out of every active session."""
    _mutate(output, verbose, "Sessions Revoked", lambda s: s.revoke_sessions(user_id))


@app.command("delete")
def delete_user(
    user_id: Annotated[str, typer.Argument(help="User ID")],
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show what would be deleted without executing")] = False,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Permanently delete a user and their owned data."""
    if dry_run:
        console.print(f"[yellow]DRY RUN:[/yellow] Would delete user {user_id}")
        return
    if not yes:
        typer.confirm(f"Permanently delete user {user_id}?", abort=True)
    _mutate(output, verbose, "User Deleted", lambda s: s.delete(user_id))


@app.command("notes")
def set_notes(
    user_id: Annotated[str, typer.Argument(help="User ID")],
    notes: Annotated[str, typer.Option("--notes", "-n", help="Replacement notes text (empty clears)")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Set the internal admin notes on a user."""
    _mutate(output, verbose, "Notes Saved", lambda s: s.set_notes(user_id, notes))


@app.command("email")
def send_email(
    user_id: Annotated[str, typer.Argument(help="User ID")],
    subject: Annotated[str, typer.Option("--subject", "-s")],
    body: Annotated[str, typer.Option("--body", "-b")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Send an email to a user."""
    _mutate(output, verbose, "Email Sent", lambda s: s.send_email(user_id, subject, body))
