"""
People commands.

Usage:
    productive people list --company "Acme" --status active
    productive people get jane@example.com
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
    GetPersonOptions,
    ListPeopleOptions,
    get_person,
    list_people,
)

people_app = typer.Typer(name="people", help="People commands", no_args_is_help=True)


@people_app.command("list")
def people_list(
    ctx: typer.Context,
    company: Annotated[str | None, typer.Option(help="Company ID or name")] = None,
    project: Annotated[str | None, typer.Option(help="Project ID, number or name")] = None,
    role: Annotated[str | None, typer.Option(help="Role ID")] = None,
    team: Annotated[str | None, typer.Option(help="Team name")] = None,
    person_type: Annotated[
        str | None, typer.Option("--type", help="user, contact or placeholder")
    ] = None,
    status: Annotated[str | None, typer.Option(help="active or deactivated")] = None,
    page: PageOption = 1,
    size: SizeOption = 100,
    sort: SortOption = None,
    filter: FilterOption = None,
) -> None:
    """List people."""
    options = ListPeopleOptions(
        page=page,
        per_page=size,
        sort=sort,
        additional_filters=parse_filters(filter),
        company_id=company,
        project_id=project,
        role=role,
        team=team,
        person_type=person_type,
        status=status,
    )
    execute_command(ctx, list_people, options, title="People")


@people_app.command("get")
def people_get(
    ctx: typer.Context,
    person: Annotated[str, typer.Argument(help="Person ID, email or name")],
) -> None:
    """Show one person."""
    execute_command(ctx, get_person, GetPersonOptions(id=person), title="person")
