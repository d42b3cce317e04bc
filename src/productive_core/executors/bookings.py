"""
Booking Executors

Bookings are resource-planning allocations of a person to a service or an
absence event. Draft (tentative) bookings are included unless a draft
filter is given.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.productive_api.models import Booking
from src.productive_core.context import ExecutorContext
from src.productive_core.executors.helpers import resolved_or_none, set_filter
from src.productive_core.executors.types import ExecutorResult, PaginationOptions


@dataclass
class ListBookingsOptions(PaginationOptions):
    person_id: str | None = None
    project_id: str | None = None
    company_id: str | None = None
    service_id: str | None = None
    event_id: str | None = None
    after: str | None = None  # YYYY-MM-DD
    before: str | None = None  # YYYY-MM-DD
    draft: bool | None = None  # None lists both draft and confirmed bookings


def build_booking_filters(options: ListBookingsOptions) -> dict[str, str]:
    filter = dict(options.additional_filters)
    set_filter(filter, "person_id", options.person_id)
    set_filter(filter, "project_id", options.project_id)
    set_filter(filter, "company_id", options.company_id)
    set_filter(filter, "service_id", options.service_id)
    set_filter(filter, "event_id", options.event_id)
    set_filter(filter, "after", options.after)
    set_filter(filter, "before", options.before)
    if options.draft is not None:
        filter["draft"] = "true" if options.draft else "false"
    if "draft" not in filter:
        filter["with_draft"] = "true"
    return filter


async def list_bookings(
    options: ListBookingsOptions, ctx: ExecutorContext
) -> ExecutorResult[list[Booking]]:
    resolution = await ctx.resolver.resolve_filters(build_booking_filters(options))
    response = await ctx.api.get_bookings(
        page=options.page,
        per_page=options.per_page,
        filter=resolution.resolved,
        sort=options.sort,
    )
    return ExecutorResult(
        data=[Booking.from_resource(resource) for resource in response.items()],
        meta=response.meta,
        resolved=resolved_or_none(resolution.metadata),
    )
