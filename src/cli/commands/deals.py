"""
Deal commands.

Usage:
    productive deals list --company "Acme" --status open
    productive deals get D-42
    productive deals add "Website redesign" --company "Acme" --responsible jane@example.com
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
    CreateDealOptions,
    GetDealOptions,
    ListDealsOptions,
    UpdateDealOptions,
    create_deal,
    get_deal,
    list_deals,
    update_deal,
)

deals_app = typer.Typer(name="deals", help="Deal and budget commands", no_args_is_help=True)

ResponsibleOption = Annotated[
    str | None, typer.Option("--responsible", help="Responsible person ID, email or name")
]


@deals_app.command("list")
def deals_list(
    ctx: typer.Context,
    company: Annotated[str | None, typer.Option(help="Company ID or name")] = None,
    project: Annotated[str | None, typer.Option(help="Project ID, number or name")] = None,
    responsible: ResponsibleOption = None,
    pipeline: Annotated[str | None, typer.Option(help="Pipeline ID")] = None,
    status: Annotated[str | None, typer.Option(help="open, won or lost")] = None,
    deal_type: Annotated[str | None, typer.Option("--type", help="deal or budget")] = None,
    budget_status: Annotated[
        str | None, typer.Option("--budget-status", help="open or closed")
    ] = None,
    page: PageOption = 1,
    size: SizeOption = 100,
    sort: SortOption = None,
    filter: FilterOption = None,
) -> None:
    """List deals."""
    options = ListDealsOptions(
        page=page,
        per_page=size,
        sort=sort,
        additional_filters=parse_filters(filter),
        company_id=company,
        project_id=project,
        responsible_id=responsible,
        pipeline_id=pipeline,
        status=status,
        deal_type=deal_type,
        budget_status=budget_status,
    )
    execute_command(ctx, list_deals, options, title="Deals")


@deals_app.command("get")
def deals_get(
    ctx: typer.Context,
    deal: Annotated[str, typer.Argument(help="Deal ID, number (D-123) or name")],
) -> None:
    """Show one deal."""
    execute_command(ctx, get_deal, GetDealOptions(id=deal), title="deal")


@deals_app.command("add")
def deals_add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Deal name")],
    company: Annotated[str, typer.Option(help="Company ID or name")],
    responsible: ResponsibleOption = None,
    date: Annotated[str | None, typer.Option(help="Start date (YYYY-MM-DD)")] = None,
    budget: Annotated[bool, typer.Option("--budget", help="Create a budget")] = False,
) -> None:
    """Create a deal."""
    options = CreateDealOptions(
        name=name,
        company_id=company,
        responsible_id=responsible,
        date=date,
        budget=budget or None,
    )
    execute_command(ctx, create_deal, options, title="deal")


@deals_app.command("update")
def deals_update(
    ctx: typer.Context,
    deal: Annotated[str, typer.Argument(help="Deal ID, number or name")],
    name: Annotated[str | None, typer.Option(help="New name")] = None,
    date: Annotated[str | None, typer.Option(help="Start date (YYYY-MM-DD)")] = None,
    end_date: Annotated[str | None, typer.Option("--end-date", help="End date")] = None,
    responsible: ResponsibleOption = None,
    deal_status: Annotated[str | None, typer.Option("--status-id", help="Deal status ID")] = None,
) -> None:
    """Update a deal."""
    options = UpdateDealOptions(
        id=deal,
        name=name,
        date=date,
        end_date=end_date,
        responsible_id=responsible,
        deal_status_id=deal_status,
    )
    execute_command(ctx, update_deal, options, title="deal")
