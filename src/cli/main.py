"""
Productive CLI

Entry point for the Productive.io command-line interface.

Usage:
    productive people list --company "Acme"
    productive --format json time list --person jane@example.com
    productive resolve PRJ-123
    python -m src.cli.main --help
"""

from __future__ import annotations

import atexit
import logging
from typing import Annotated

import typer

from src.cli.commands.bookings import bookings_app
from src.cli.commands.companies import companies_app
from src.cli.commands.config import config_app
from src.cli.commands.deals import deals_app
from src.cli.commands.people import people_app
from src.cli.commands.projects import projects_app
from src.cli.commands.resolve import resolve_command
from src.cli.commands.services import services_app
from src.cli.commands.tasks import tasks_app
from src.cli.commands.time_entries import time_app
from src.cli.output import OutputFormat
from src.cli.session import CliState
from src.common.logging import configure_sanitized_logging
from src.common.telemetry import init_telemetry, shutdown_telemetry

app = typer.Typer(
    name="productive",
    help="Productive.io command-line client",
    no_args_is_help=True,
)

# Register subcommand groups
app.add_typer(people_app, name="people", help="People")
app.add_typer(companies_app, name="companies", help="Companies")
app.add_typer(projects_app, name="projects", help="Projects")
app.add_typer(services_app, name="services", help="Services")
app.add_typer(deals_app, name="deals", help="Deals and budgets")
app.add_typer(tasks_app, name="tasks", help="Tasks")
app.add_typer(time_app, name="time", help="Time entries")
app.add_typer(bookings_app, name="bookings", help="Bookings")
app.add_typer(config_app, name="config", help="Configuration")

# Register commands
app.command(name="resolve", help="Resolve an identifier to Productive IDs")(resolve_command)


@app.callback()
def main(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.HUMAN,
    token: Annotated[
        str | None, typer.Option("--token", help="API token (PRODUCTIVE_API_TOKEN)")
    ] = None,
    org_id: Annotated[
        str | None, typer.Option("--org-id", help="Organization ID (PRODUCTIVE_ORG_ID)")
    ] = None,
    user_id: Annotated[
        str | None, typer.Option("--user-id", help="Your person ID (PRODUCTIVE_USER_ID)")
    ] = None,
    base_url: Annotated[
        str | None, typer.Option("--base-url", help="API base URL (PRODUCTIVE_BASE_URL)")
    ] = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="Fail on ambiguous identifiers")
    ] = False,
    no_resolve: Annotated[
        bool, typer.Option("--no-resolve", help="Pass identifiers through unresolved")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Productive.io command-line client."""
    state = CliState(
        output_format=output_format,
        token=token,
        org_id=org_id,
        user_id=user_id,
        base_url=base_url,
        strict=strict,
        no_resolve=no_resolve,
        verbose=verbose,
    )
    ctx.obj = state

    configure_sanitized_logging(level=logging.DEBUG if verbose else logging.WARNING)

    # Initialize OpenTelemetry once per invocation (no-op unless enabled)
    if init_telemetry(service_name="productive-cli"):
        atexit.register(shutdown_telemetry)


@app.command()
def version() -> None:
    """Show version information."""
    from src import __version__

    typer.echo(f"productive version {__version__}")


if __name__ == "__main__":
    app()
