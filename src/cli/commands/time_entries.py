"""
Time entry commands.

Usage:
    productive time list --person jane@example.com --after 2026-01-01
    productive time add --service "Development" --project PRJ-12 --time 90 --note "Review"
    productive time update 4321 --time 120
    productive time delete 4321
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
from src.productive_core.executors import (
    CreateTimeEntryOptions,
    DeleteTimeEntryOptions,
    GetTimeEntryOptions,
    ListTimeEntriesOptions,
    UpdateTimeEntryOptions,
    create_time_entry,
    delete_time_entry,
    get_time_entry,
    list_time_entries,
    update_time_entry,
)

time_app = typer.Typer(name="time", help="Time entry commands", no_args_is_help=True)

DateOption = Annotated[str | None, typer.Option("--date", help="Date (YYYY-MM-DD)")]
NoteOption = Annotated[str | None, typer.Option("--note", help="Note")]


@time_app.command("list")
def time_list(
    ctx: typer.Context,
    person: Annotated[str | None, typer.Option(help="Person ID, email or name")] = None,
    project: Annotated[str | None, typer.Option(help="Project ID, number or name")] = None,
    service: Annotated[str | None, typer.Option(help="Service ID or name")] = None,
    task: Annotated[str | None, typer.Option(help="Task ID")] = None,
    company: Annotated[str | None, typer.Option(help="Company ID or name")] = None,
    deal: Annotated[str | None, typer.Option(help="Deal ID, number or name")] = None,
    after: Annotated[str | None, typer.Option(help="From date (YYYY-MM-DD)")] = None,
    before: Annotated[str | None, typer.Option(help="To date (YYYY-MM-DD)")] = None,
    status: Annotated[
        str | None, typer.Option(help="approved, unapproved or rejected")
    ] = None,
    billing_type: Annotated[
        str | None, typer.Option("--billing-type", help="fixed, actuals or non_billable")
    ] = None,
    invoicing_status: Annotated[
        str | None,
        typer.Option("--invoicing-status", help="not_invoiced, drafted or finalized"),
    ] = None,
    page: PageOption = 1,
    size: SizeOption = 100,
    sort: SortOption = None,
    filter: FilterOption = None,
) -> None:
    """List time entries."""
    options = ListTimeEntriesOptions(
        page=page,
        per_page=size,
        sort=sort,
        additional_filters=parse_filters(filter),
        person_id=person,
        project_id=project,
        service_id=service,
        task_id=task,
        company_id=company,
        deal_id=deal,
        after=after,
        before=before,
        status=status,
        billing_type=billing_type,
        invoicing_status=invoicing_status,
    )
    execute_command(ctx, list_time_entries, options, title="Time entries")


@time_app.command("get")
def time_get(
    ctx: typer.Context,
    entry: Annotated[str, typer.Argument(help="Time entry ID")],
) -> None:
    """Show one time entry."""
    execute_command(ctx, get_time_entry, GetTimeEntryOptions(id=entry), title="time entry")


@time_app.command("add")
def time_add(
    ctx: typer.Context,
    service: Annotated[str, typer.Option(help="Service ID or name")],
    time: Annotated[int, typer.Option("--time", "-t", help="Duration in minutes")],
    person: Annotated[
        str | None, typer.Option(help="Person ID, email or name (defaults to --user-id)")
    ] = None,
    project: Annotated[
        str | None, typer.Option(help="Project used to narrow the service name")
    ] = None,
    date: DateOption = None,
    note: NoteOption = None,
    task: Annotated[str | None, typer.Option(help="Task ID")] = None,
) -> None:
    """Log time."""
    options = CreateTimeEntryOptions(
        service_id=service,
        time=time,
        person_id=person,
        project_id=project,
        date=date,
        note=note,
        task_id=task,
    )
    execute_command(ctx, create_time_entry, options, title="time entry")


@time_app.command("update")
def time_update(
    ctx: typer.Context,
    entry: Annotated[str, typer.Argument(help="Time entry ID")],
    time: Annotated[int | None, typer.Option("--time", "-t", help="Minutes")] = None,
    billable_time: Annotated[
        int | None, typer.Option("--billable-time", help="Billable minutes")
    ] = None,
    date: DateOption = None,
    note: NoteOption = None,
) -> None:
    """Update a time entry."""
    options = UpdateTimeEntryOptions(
        id=entry,
        time=time,
        billable_time=billable_time,
        date=date,
        note=note,
    )
    execute_command(ctx, update_time_entry, options, title="time entry")


@time_app.command("delete")
def time_delete(
    ctx: typer.Context,
    entry: Annotated[str, typer.Argument(help="Time entry ID")],
) -> None:
    """Delete a time entry."""
    execute_command(ctx, delete_time_entry, DeleteTimeEntryOptions(id=entry), title="time entry")
