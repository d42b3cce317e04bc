"""
Service commands.

Usage:
    productive services list --project PRJ-123
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
from src.productive_core.executors import ListServicesOptions, list_services

services_app = typer.Typer(name="services", help="Service commands", no_args_is_help=True)


@services_app.command("list")
def services_list(
    ctx: typer.Context,
    project: Annotated[str | None, typer.Option(help="Project ID, number or name")] = None,
    deal: Annotated[str | None, typer.Option(help="Deal ID, number or name")] = None,
    task: Annotated[str | None, typer.Option(help="Task ID")] = None,
    person: Annotated[str | None, typer.Option(help="Person ID, email or name")] = None,
    budget_status: Annotated[
        str | None, typer.Option("--budget-status", help="open or delivered")
    ] = None,
    billing_type: Annotated[
        str | None, typer.Option("--billing-type", help="fixed, actuals or none")
    ] = None,
    time_tracking: Annotated[
        bool | None,
        typer.Option("--time-tracking/--no-time-tracking", help="Time tracking enabled"),
    ] = None,
    page: PageOption = 1,
    size: SizeOption = 100,
    sort: SortOption = None,
    filter: FilterOption = None,
) -> None:
    """List services."""
    options = ListServicesOptions(
        page=page,
        per_page=size,
        sort=sort,
        additional_filters=parse_filters(filter),
        project_id=project,
        deal_id=deal,
        task_id=task,
        person_id=person,
        budget_status=budget_status,
        billing_type=billing_type,
        time_tracking=time_tracking,
    )
    execute_command(ctx, list_services, options, title="Services")
