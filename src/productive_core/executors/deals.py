"""
Deal Executors

Deals and budgets share the same endpoint; `deal_type` selects between them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.productive_api.models import Deal
from src.productive_core.context import ExecutorContext
from src.productive_core.executors.errors import no_updates_error, require
from src.productive_core.executors.helpers import (
    compact,
    map_enum,
    resolve_field,
    resolved_or_none,
    set_filter,
)
from src.productive_core.executors.types import ExecutorResult, PaginationOptions
from src.productive_core.resolution import ResolvedInfo, ResourceType

STATUS_MAP = {"open": "1", "won": "2", "lost": "3"}
TYPE_MAP = {"deal": "1", "budget": "2"}
BUDGET_STATUS_MAP = {"open": "1", "closed": "2"}

FILTER_TYPE_MAPPING: dict[str, ResourceType] = {
    "company_id": ResourceType.COMPANY,
    "project_id": ResourceType.PROJECT,
    "responsible_id": ResourceType.PERSON,
}

DEFAULT_INCLUDE = ["company", "deal_status", "responsible"]


@dataclass
class ListDealsOptions(PaginationOptions):
    company_id: str | None = None
    project_id: str | None = None
    responsible_id: str | None = None
    pipeline_id: str | None = None
    status: str | None = None  # open | won | lost
    deal_type: str | None = None  # deal | budget
    budget_status: str | None = None  # open | closed
    include: list[str] | None = None


@dataclass
class GetDealOptions:
    id: str  # numeric ID, D-123 / DEAL-123, or name
    include: list[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))


@dataclass
class CreateDealOptions:
    name: str | None = None
    company_id: str | None = None
    responsible_id: str | None = None
    date: str | None = None
    budget: bool | None = None


@dataclass
class UpdateDealOptions:
    id: str = ""
    name: str | None = None
    date: str | None = None
    end_date: str | None = None
    responsible_id: str | None = None
    deal_status_id: str | None = None


def build_deal_filters(options: ListDealsOptions) -> dict[str, str]:
    filter = dict(options.additional_filters)
    set_filter(filter, "company_id", options.company_id)
    set_filter(filter, "project_id", options.project_id)
    set_filter(filter, "responsible_id", options.responsible_id)
    set_filter(filter, "pipeline_id", options.pipeline_id)
    set_filter(filter, "stage_status_id", map_enum(STATUS_MAP, options.status))
    set_filter(filter, "type", map_enum(TYPE_MAP, options.deal_type))
    set_filter(filter, "budget_status", map_enum(BUDGET_STATUS_MAP, options.budget_status))
    return filter


async def list_deals(options: ListDealsOptions, ctx: ExecutorContext) -> ExecutorResult[list[Deal]]:
    resolution = await ctx.resolver.resolve_filters(
        build_deal_filters(options), FILTER_TYPE_MAPPING
    )
    response = await ctx.api.get_deals(
        page=options.page,
        per_page=options.per_page,
        filter=resolution.resolved,
        sort=options.sort,
        include=options.include if options.include is not None else DEFAULT_INCLUDE,
    )
    return ExecutorResult(
        data=[Deal.from_resource(resource) for resource in response.items()],
        meta=response.meta,
        included=response.included,
        resolved=resolved_or_none(resolution.metadata),
    )


async def get_deal(options: GetDealOptions, ctx: ExecutorContext) -> ExecutorResult[Deal]:
    metadata: dict[str, ResolvedInfo] = {}
    deal_id = await resolve_field(ctx, options.id, ResourceType.DEAL, "id", metadata)
    response = await ctx.api.get_deal(deal_id, include=options.include)
    return ExecutorResult(
        data=Deal.from_resource(response.item()),
        included=response.included,
        resolved=resolved_or_none(metadata),
    )


async def create_deal(options: CreateDealOptions, ctx: ExecutorContext) -> ExecutorResult[Deal]:
    require(options.name, "name", "Deal name")
    require(options.company_id, "company_id", "Company")

    metadata: dict[str, ResolvedInfo] = {}
    company_id = await resolve_field(
        ctx, options.company_id, ResourceType.COMPANY, "company_id", metadata
    )
    responsible_id = await resolve_field(
        ctx, options.responsible_id, ResourceType.PERSON, "responsible_id", metadata
    )

    response = await ctx.api.create_deal(
        compact(
            {
                "name": options.name,
                "company_id": company_id,
                "responsible_id": responsible_id,
                "date": options.date,
                "budget": options.budget,
            }
        )
    )
    return ExecutorResult(
        data=Deal.from_resource(response.item()),
        resolved=resolved_or_none(metadata),
    )


async def update_deal(options: UpdateDealOptions, ctx: ExecutorContext) -> ExecutorResult[Deal]:
    require(options.id, "id", "Deal ID")
    fields = compact(
        {
            "name": options.name,
            "date": options.date,
            "end_date": options.end_date,
            "responsible_id": options.responsible_id,
            "deal_status_id": options.deal_status_id,
        }
    )
    if not fields:
        raise no_updates_error()

    metadata: dict[str, ResolvedInfo] = {}
    deal_id = await resolve_field(ctx, options.id, ResourceType.DEAL, "id", metadata)
    if "responsible_id" in fields:
        fields["responsible_id"] = await resolve_field(
            ctx, options.responsible_id, ResourceType.PERSON, "responsible_id", metadata
        )

    response = await ctx.api.update_deal(deal_id, fields)
    return ExecutorResult(
        data=Deal.from_resource(response.item()),
        resolved=resolved_or_none(metadata),
    )
