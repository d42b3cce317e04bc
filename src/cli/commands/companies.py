"""
Company commands.

Usage:
    productive companies list --query acme
    productive companies add "Acme Corp" --currency EUR
    productive companies update "Acme Corp" --vat DE123
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
    CreateCompanyOptions,
    GetCompanyOptions,
    ListCompaniesOptions,
    UpdateCompanyOptions,
    create_company,
    get_company,
    list_companies,
    update_company,
)

companies_app = typer.Typer(name="companies", help="Company commands", no_args_is_help=True)

BillingNameOption = Annotated[str | None, typer.Option("--billing-name", help="Billing name")]
VatOption = Annotated[str | None, typer.Option("--vat", help="VAT number")]
CurrencyOption = Annotated[str | None, typer.Option("--currency", help="Default currency")]
CodeOption = Annotated[str | None, typer.Option("--code", help="Company code")]
DomainOption = Annotated[str | None, typer.Option("--domain", help="Web domain")]
DueDaysOption = Annotated[int | None, typer.Option("--due-days", help="Invoice due days")]


@companies_app.command("list")
def companies_list(
    ctx: typer.Context,
    query: Annotated[str | None, typer.Option("--query", "-q", help="Search text")] = None,
    archived: Annotated[
        bool | None, typer.Option("--archived/--active", help="Archived or active only")
    ] = None,
    page: PageOption = 1,
    size: SizeOption = 100,
    sort: SortOption = None,
    filter: FilterOption = None,
) -> None:
    """List companies."""
    options = ListCompaniesOptions(
        page=page,
        per_page=size,
        sort=sort,
        additional_filters=parse_filters(filter),
        query=query,
        archived=archived,
    )
    execute_command(ctx, list_companies, options, title="Companies")


@companies_app.command("get")
def companies_get(
    ctx: typer.Context,
    company: Annotated[str, typer.Argument(help="Company ID or name")],
) -> None:
    """Show one company."""
    execute_command(ctx, get_company, GetCompanyOptions(id=company), title="company")


@companies_app.command("add")
def companies_add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Company name")],
    billing_name: BillingNameOption = None,
    vat: VatOption = None,
    currency: CurrencyOption = None,
    code: CodeOption = None,
    domain: DomainOption = None,
    due_days: DueDaysOption = None,
) -> None:
    """Create a company."""
    options = CreateCompanyOptions(
        name=name,
        billing_name=billing_name,
        vat=vat,
        default_currency=currency,
        company_code=code,
        domain=domain,
        due_days=due_days,
    )
    execute_command(ctx, create_company, options, title="company")


@companies_app.command("update")
def companies_update(
    ctx: typer.Context,
    company: Annotated[str, typer.Argument(help="Company ID or name")],
    name: Annotated[str | None, typer.Option("--name", help="New name")] = None,
    billing_name: BillingNameOption = None,
    vat: VatOption = None,
    currency: CurrencyOption = None,
    code: CodeOption = None,
    domain: DomainOption = None,
    due_days: DueDaysOption = None,
) -> None:
    """Update a company."""
    options = UpdateCompanyOptions(
        id=company,
        name=name,
        billing_name=billing_name,
        vat=vat,
        default_currency=currency,
        company_code=code,
        domain=domain,
        due_days=due_days,
    )
    execute_command(ctx, update_company, options, title="company")
