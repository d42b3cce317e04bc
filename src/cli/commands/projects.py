"""
Project commands.

Usage:
    productive projects list --company "Acme" --status active
    productive projects get PRJ-123
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
    GetProjectOptions,
    ListProjectsOptions,
    get_project,
    list_projects,
)

projects_app = typer.Typer(name="projects", help="Project commands", no_args_is_help=True)


@projects_app.command("list")
def projects_list(
    ctx: typer.Context,
    company: Annotated[str | None, typer.Option(help="Company ID or name")] = None,
    responsible: Annotated[
        str | None, typer.Option(help="Responsible person ID, email or name")
    ] = None,
    person: Annotated[str | None, typer.Option(help="Member ID, email or name")] = None,
    project_type: Annotated[str | None, typer.Option("--type", help="internal or client")] = None,
    status: Annotated[str | None, typer.Option(help="active or archived")] = None,
    page: PageOption = 1,
    size: SizeOption = 100,
    sort: SortOption = None,
    filter: FilterOption = None,
) -> None:
    """List projects."""
    options = ListProjectsOptions(
        page=page,
        per_page=size,
        sort=sort,
        additional_filters=parse_filters(filter),
        company_id=company,
        responsible_id=responsible,
        person_id=person,
        project_type=project_type,
        status=status,
    )
    execute_command(ctx, list_projects, options, title="Projects")


@projects_app.command("get")
def projects_get(
    ctx: typer.Context,
    project: Annotated[str, typer.Argument(help="Project ID, number (PRJ-123) or name")],
) -> None:
    """Show one project."""
    execute_command(ctx, get_project, GetProjectOptions(id=project), title="project")
