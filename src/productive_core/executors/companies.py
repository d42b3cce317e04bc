"""
Company Executors
"""

from __future__ import annotations

from dataclasses import dataclass

from src.productive_api.models import Company
from src.productive_core.context import ExecutorContext
from src.productive_core.executors.errors import no_updates_error, require
from src.productive_core.executors.helpers import (
    compact,
    resolve_field,
    resolved_or_none,
    set_filter,
)
from src.productive_core.executors.types import ExecutorResult, PaginationOptions
from src.productive_core.resolution import ResolvedInfo, ResourceType

# Company filters carry no resolvable keys
FILTER_TYPE_MAPPING: dict[str, ResourceType] = {}


@dataclass
class ListCompaniesOptions(PaginationOptions):
    query: str | None = None
    archived: bool | None = None


@dataclass
class GetCompanyOptions:
    id: str


@dataclass
class CreateCompanyOptions:
    name: str | None = None
    billing_name: str | None = None
    vat: str | None = None
    default_currency: str | None = None
    company_code: str | None = None
    domain: str | None = None
    due_days: int | None = None


@dataclass
class UpdateCompanyOptions(CreateCompanyOptions):
    id: str = ""


def build_company_filters(options: ListCompaniesOptions) -> dict[str, str]:
    filter = dict(options.additional_filters)
    set_filter(filter, "query", options.query)
    if options.archived is not None:
        filter["archived"] = "true" if options.archived else "false"
    return filter


def _company_fields(options: CreateCompanyOptions) -> dict[str, object]:
    return compact(
        {
            "name": options.name,
            "billing_name": options.billing_name,
            "vat": options.vat,
            "default_currency": options.default_currency,
            "company_code": options.company_code,
            "domain": options.domain,
            "due_days": options.due_days,
        }
    )


async def list_companies(
    options: ListCompaniesOptions, ctx: ExecutorContext
) -> ExecutorResult[list[Company]]:
    resolution = await ctx.resolver.resolve_filters(
        build_company_filters(options), FILTER_TYPE_MAPPING
    )
    response = await ctx.api.get_companies(
        page=options.page,
        per_page=options.per_page,
        filter=resolution.resolved,
        sort=options.sort,
    )
    return ExecutorResult(
        data=[Company.from_resource(resource) for resource in response.items()],
        meta=response.meta,
        resolved=resolved_or_none(resolution.metadata),
    )


async def get_company(options: GetCompanyOptions, ctx: ExecutorContext) -> ExecutorResult[Company]:
    metadata: dict[str, ResolvedInfo] = {}
    company_id = await resolve_field(ctx, options.id, ResourceType.COMPANY, "id", metadata)
    response = await ctx.api.get_company(company_id)
    return ExecutorResult(
        data=Company.from_resource(response.item()),
        resolved=resolved_or_none(metadata),
    )


async def create_company(
    options: CreateCompanyOptions, ctx: ExecutorContext
) -> ExecutorResult[Company]:
    require(options.name, "name", "Company name")
    response = await ctx.api.create_company(_company_fields(options))
    return ExecutorResult(data=Company.from_resource(response.item()))


async def update_company(
    options: UpdateCompanyOptions, ctx: ExecutorContext
) -> ExecutorResult[Company]:
    require(options.id, "id", "Company ID")
    fields = _company_fields(options)
    if not fields:
        raise no_updates_error()

    metadata: dict[str, ResolvedInfo] = {}
    company_id = await resolve_field(ctx, options.id, ResourceType.COMPANY, "id", metadata)
    response = await ctx.api.update_company(company_id, fields)
    return ExecutorResult(
        data=Company.from_resource(response.item()),
        resolved=resolved_or_none(metadata),
    )
