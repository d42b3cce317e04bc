"""
Booking commands.

Usage:
    productive bookings list --person jane@example.com --after 2024-06-01
    productive bookings list --project PRJ-123 --no-draft
"""

from __future__ import annotations

from typing import Annotated

import typer

from src.cli.commands.common import (
    FilterOption,
    PageOption,
    SizeOption,
    SortOption,
    parse_filters,
)
from src.cli.session import execute_command
from src.productive_core.executors import ListBookingsOptions, list_bookings

bookings_app = typer.Typer(name="bookings", help="Booking commands", no_args_is_help=True)


@bookings_app.command("list")
def bookings_list(
    ctx: typer.Context,
    person: Annotated[str | None, typer.Option(help="Person ID, email or name")] = None,
    project: Annotated[str | None, typer.Option(help="Project ID, number or name")] = None,
    company: Annotated[str | None, typer.Option(help="Company ID or name")] = None,
    service: Annotated[
        str | None, typer.Option(help="Service ID or name (scoped by --project)")
    ] = None,
    event: Annotated[str | None, typer.Option(help="Absence event ID")] = None,
    after: Annotated[str | None, typer.Option(help="Start date (YYYY-MM-DD)")] = None,
    before: Annotated[str | None, typer.Option(help="End date (YYYY-MM-DD)")] = None,
    draft: Annotated[
        bool | None,
        typer.Option("--draft/--no-draft", help="Only draft or only confirmed bookings"),
    ] = None,
    page: PageOption = 1,
    size: SizeOption = 100,
    sort: SortOption = None,
    filter: FilterOption = None,
) -> None:
    """List bookings."""
    options = ListBookingsOptions(
        page=page,
        per_page=size,
        sort=sort,
        additional_filters=parse_filters(filter),
        person_id=person,
        project_id=project,
        company_id=company,
        service_id=service,
        event_id=event,
        after=after,
        before=before,
        draft=draft,
    )
    execute_command(ctx, list_bookings, options, title="Bookings")
