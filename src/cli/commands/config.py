"""
Config command - show the effective configuration.

Usage:
    productive config show
    productive --format json config show
"""

from __future__ import annotations

import json

import typer
from rich.table import Table

from src.cli.output import OutputFormat, console
from src.cli.session import get_state

config_app = typer.Typer(name="config", help="Configuration commands", no_args_is_help=True)


def mask_secret(value: str | None) -> str | None:
    if not value:
        return value
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}…{value[-4:]}"


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show configuration from environment, .env and global options."""
    state = get_state(ctx)
    config = state.load_config()
    values = config.model_dump()
    values["api_token"] = mask_secret(config.api_token)
    if config.resolver_cache_url:
        values["resolver_cache_url"] = mask_secret(config.resolver_cache_url)

    if state.output_format is OutputFormat.JSON:
        typer.echo(json.dumps(values, indent=2, default=str))
        return

    table = Table(title="Productive configuration")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    for key, value in values.items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)
