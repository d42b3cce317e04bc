"""
Resolve command - show what a human-friendly identifier resolves to.

Usage:
    productive resolve jane@example.com
    productive resolve "Development" --type service --project PRJ-12
    productive resolve PRJ-123 --quiet
"""

from __future__ import annotations

from typing import Annotated

import typer

from src.cli.output import render_result
from src.cli.session import get_state, run_executor
from src.productive_core.executors import ResolveOptions, resolve_identifier
from src.productive_core.resolution import ResourceType


def resolve_command(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Email, name, project or deal number")],
    resource_type: Annotated[
        ResourceType | None,
        typer.Option("--type", "-t", help="Resource type (detected from the query if omitted)"),
    ] = None,
    project: Annotated[
        str | None, typer.Option("--project", help="Project scope for service lookups")
    ] = None,
    first: Annotated[bool, typer.Option("--first", help="Only show the best match")] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Print only IDs, one per line")
    ] = False,
) -> None:
    """Resolve an identifier to Productive IDs."""
    options = ResolveOptions(
        query=query,
        type=resource_type.value if resource_type else None,
        project_id=project,
        first=first,
    )
    result = run_executor(ctx, resolve_identifier, options)

    if quiet:
        for match in result.data:
            typer.echo(match.id)
        return

    render_result(result, get_state(ctx).output_format, title=f"Matches for {query}")
