"""AgentCost admin CLI — entry point.

Operator console for the AgentCost usage-metering platform: users,
projects and API keys, pricing, system health, analytics and feedback.
"""

from __future__ import annotations

import logging

import typer

from agentcost_admin.commands.auth_cmd import app as auth_app
from agentcost_admin.commands.overview_cmd import app as overview_app
from agentcost_admin.commands.users_cmd import app as users_app
from agentcost_admin.commands.projects_cmd import app as projects_app
from agentcost_admin.commands.pricing_cmd import app as pricing_app
from agentcost_admin.commands.system_cmd import app as system_app
from agentcost_admin.commands.analytics_cmd import app as analytics_app
from agentcost_admin.commands.incidents_cmd import app as incidents_app
from agentcost_admin.commands.audit_cmd import app as audit_app
from agentcost_admin.commands.feedback_cmd import app as feedback_app

app = typer.Typer(
    name="agentcost-admin",
    help="Admin console for the AgentCost usage-metering platform.",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(auth_app, name="auth")
app.add_typer(overview_app, name="overview")
app.add_typer(users_app, name="users")
app.add_typer(projects_app, name="projects")
app.add_typer(pricing_app, name="pricing")
app.add_typer(system_app, name="system")
app.add_typer(analytics_app, name="analytics")
app.add_typer(incidents_app, name="incidents")
app.add_typer(audit_app, name="audit")
app.add_typer(feedback_app, name="feedback")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """AgentCost admin — manage users, projects, pricing and feedback."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


if __name__ == "__main__":
    app()
