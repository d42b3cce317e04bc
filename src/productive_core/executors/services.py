"""
Service Executors
"""

from __future__ import annotations

from dataclasses import dataclass

from src.productive_api.models import Service
from src.productive_core.context import ExecutorContext
from src.productive_core.executors.helpers import map_enum, resolved_or_none, set_filter
from src.productive_core.executors.types import ExecutorResult, PaginationOptions

BUDGET_STATUS_MAP = {"open": "1", "delivered": "2"}
BILLING_TYPE_MAP = {"fixed": "1", "actuals": "2", "none": "3"}


@dataclass
class ListServicesOptions(PaginationOptions):
    project_id: str | None = None
    deal_id: str | None = None
    task_id: str | None = None
    person_id: str | None = None
    budget_status: str | None = None  # open | delivered
    billing_type: str | None = None  # fixed | actuals | none
    time_tracking: bool | None = None


def build_services_filters(options: ListServicesOptions) -> dict[str, str]:
    filter = dict(options.additional_filters)
    set_filter(filter, "project_id", options.project_id)
    set_filter(filter, "deal_id", options.deal_id)
    set_filter(filter, "task_id", options.task_id)
    set_filter(filter, "person_id", options.person_id)
    set_filter(filter, "budget_status", map_enum(BUDGET_STATUS_MAP, options.budget_status))
    set_filter(filter, "billing_type", map_enum(BILLING_TYPE_MAP, options.billing_type))
    if options.time_tracking is not None:
        filter["time_tracking_enabled"] = "true" if options.time_tracking else "false"
    return filter


async def list_services(
    options: ListServicesOptions, ctx: ExecutorContext
) -> ExecutorResult[list[Service]]:
    resolution = await ctx.resolver.resolve_filters(build_services_filters(options))
    response = await ctx.api.get_services(
        page=options.page,
        per_page=options.per_page,
        filter=resolution.resolved,
        sort=options.sort,
    )
    return ExecutorResult(
        data=[Service.from_resource(resource) for resource in response.items()],
        meta=response.meta,
        resolved=resolved_or_none(resolution.metadata),
    )
