"""CLI commands for the admin session."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer
from rich.console import Console

from agentcost_admin.auth import AuthManager
from agentcost_admin.client import AdminApiClient
from agentcost_admin.config import get_settings
from agentcost_admin.storage import FileTokenStore
from agentcost_admin.utils.errors import AdminError, handle_error
from agentcost_admin.utils.output import OutputFormat, print_output
from agentcost_admin.utils.runner import run_with_client

console = Console(stderr=True)
app = typer.Typer(name="auth", help="Sign in, sign out and inspect the admin session.")


def _build_auth(verbose: bool = False) -> tuple[AdminApiClient, AuthManager]:
    settings = get_settings()
    store = FileTokenStore(settings.session_path)
    client = AdminApiClient(settings, store, verbose=verbose)
    return client, AuthManager(client)


@app.command()
def login(
    email: Annotated[str, typer.Option("--email", "-e", prompt=True, help="Admin account email")],
    password: Annotated[str, typer.Option("--password", "-p", prompt=True, hide_input=True, help="Account password")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Sign in with an admin account and store the session."""
    client, auth = _build_auth(verbose)
    try:
        console.print(f"Signing in as [bold]{email}[/bold]...", style="yellow")
        data = run_with_client(client, lambda: auth.login(email, password))
        result = {
            "status": "authenticated",
            "email": data.user.email,
            "name": data.user.name,
            "user_id": data.user.id,
        }
        print_output(result, output, title="Signed In")
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command()
def logout() -> None:
    """Forget the stored session."""
    client, auth = _build_auth()
    auth.logout()
    asyncio.run(client.close())
    console.print("[green]Signed out.[/green]")


@app.command()
def status(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Show what the local session holds, without contacting the backend."""
    client, auth = _build_auth()
    session = auth.get_status()
    result = {
        "has_access_token": session.has_access_token,
        "has_refresh_token": session.has_refresh_token,
        "email": session.user.email if session.user else "N/A",
    }
    print_output(result, output, title="Session Status")
    asyncio.run(client.close())


@app.command()
def whoami(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Re-verify the stored session against the backend."""
    client, auth = _build_auth(verbose)
    try:
        user = run_with_client(client, auth.restore_session)
    except AdminError as e:
        handle_error(e)
        raise typer.Exit(1)

    if user is None:
        console.print("[red]Not signed in.[/red] Run `agentcost-admin auth login`.")
        raise typer.Exit(1)
    print_output(user.model_dump(), output, title="Signed In As")


@app.command()
def refresh(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Exchange the stored refresh token for a new access token."""
    client, _ = _build_auth(verbose)

    console.print("Refreshing access token...", style="yellow")
    token = run_with_client(client, client.refresh_access_token)
    if not token:
        console.print("[red]Token refresh failed:[/red] sign in again with `agentcost-admin auth login`.")
        raise typer.Exit(1)
    print_output({"status": "refreshed"}, output, title="Token Refreshed")
