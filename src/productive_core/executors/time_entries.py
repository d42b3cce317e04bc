"""
Time Entry Executors

Durations are in minutes.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any

from src.productive_api.models import TimeEntry
from src.productive_core.context import ExecutorContext
from src.productive_core.executors.errors import (
    ExecutorValidationError,
    no_updates_error,
    require,
)
from src.productive_core.executors.helpers import (
    compact,
    map_enum,
    resolve_field,
    resolved_or_none,
    set_filter,
)
from src.productive_core.executors.types import ExecutorResult, PaginationOptions
from src.productive_core.resolution import ResolvedInfo, ResourceType

STATUS_MAP = {"approved": "1", "unapproved": "2", "rejected": "3"}
BILLING_TYPE_MAP = {"fixed": "1", "actuals": "2", "non_billable": "3"}
INVOICING_STATUS_MAP = {"not_invoiced": "1", "drafted": "2", "finalized": "3"}


@dataclass
class ListTimeEntriesOptions(PaginationOptions):
    person_id: str | None = None
    project_id: str | None = None
    service_id: str | None = None
    task_id: str | None = None
    company_id: str | None = None
    deal_id: str | None = None
    budget_id: str | None = None
    after: str | None = None  # YYYY-MM-DD
    before: str | None = None  # YYYY-MM-DD
    status: str | None = None  # approved | unapproved | rejected
    billing_type: str | None = None  # fixed | actuals | non_billable
    invoicing_status: str | None = None  # not_invoiced | drafted | finalized


@dataclass
class GetTimeEntryOptions:
    id: str


@dataclass
class CreateTimeEntryOptions:
    service_id: str | None = None
    time: int | None = None
    person_id: str | None = None  # defaults to the configured user
    project_id: str | None = None  # narrows service name resolution
    date: str | None = None  # defaults to today
    note: str | None = None
    task_id: str | None = None


@dataclass
class UpdateTimeEntryOptions:
    id: str = ""
    time: int | None = None
    billable_time: int | None = None
    date: str | None = None
    note: str | None = None


@dataclass
class DeleteTimeEntryOptions:
    id: str


def build_time_entry_filters(options: ListTimeEntriesOptions) -> dict[str, str]:
    filter = dict(options.additional_filters)
    set_filter(filter, "after", options.after)
    set_filter(filter, "before", options.before)
    set_filter(filter, "person_id", options.person_id)
    set_filter(filter, "project_id", options.project_id)
    set_filter(filter, "service_id", options.service_id)
    set_filter(filter, "task_id", options.task_id)
    set_filter(filter, "company_id", options.company_id)
    set_filter(filter, "deal_id", options.deal_id)
    set_filter(filter, "budget_id", options.budget_id)
    set_filter(filter, "status", map_enum(STATUS_MAP, options.status))
    set_filter(filter, "billing_type_id", map_enum(BILLING_TYPE_MAP, options.billing_type))
    set_filter(
        filter, "invoicing_status", map_enum(INVOICING_STATUS_MAP, options.invoicing_status)
    )
    return filter


def _validate_minutes(value: int | None, field: str) -> None:
    if value is not None and value <= 0:
        raise ExecutorValidationError(f"{field} must be a positive number of minutes", field)


async def list_time_entries(
    options: ListTimeEntriesOptions, ctx: ExecutorContext
) -> ExecutorResult[list[TimeEntry]]:
    resolution = await ctx.resolver.resolve_filters(build_time_entry_filters(options))
    response = await ctx.api.get_time_entries(
        page=options.page,
        per_page=options.per_page,
        filter=resolution.resolved,
        sort=options.sort,
    )
    return ExecutorResult(
        data=[TimeEntry.from_resource(resource) for resource in response.items()],
        meta=response.meta,
        resolved=resolved_or_none(resolution.metadata),
    )


async def get_time_entry(
    options: GetTimeEntryOptions, ctx: ExecutorContext
) -> ExecutorResult[TimeEntry]:
    response = await ctx.api.get_time_entry(options.id)
    return ExecutorResult(data=TimeEntry.from_resource(response.item()))


async def create_time_entry(
    options: CreateTimeEntryOptions, ctx: ExecutorContext
) -> ExecutorResult[TimeEntry]:
    """
    Create a time entry.

    The person defaults to the configured user. When a project is given it
    is resolved first and used as scope for the service name.
    """
    require(options.service_id, "service_id", "Service")
    require(options.time, "time", "Time")
    _validate_minutes(options.time, "time")

    person = options.person_id or ctx.config.user_id
    if not person:
        raise ExecutorValidationError(
            "Person is required. Pass a person or configure a user ID",
            "person_id",
        )

    metadata: dict[str, ResolvedInfo] = {}
    person_id = await resolve_field(ctx, person, ResourceType.PERSON, "person_id", metadata)
    project_id = await resolve_field(
        ctx, options.project_id, ResourceType.PROJECT, "project_id", metadata
    )
    scope = {"project_id": project_id} if project_id else None
    service_id = await resolve_field(
        ctx, options.service_id, ResourceType.SERVICE, "service_id", metadata, scope
    )

    response = await ctx.api.create_time_entry(
        compact(
            {
                "person_id": person_id,
                "service_id": service_id,
                "task_id": options.task_id,
                "time": options.time,
                "date": options.date or datetime.date.today().isoformat(),
                "note": options.note or "",
            }
        )
    )
    return ExecutorResult(
        data=TimeEntry.from_resource(response.item()),
        resolved=resolved_or_none(metadata),
    )


async def update_time_entry(
    options: UpdateTimeEntryOptions, ctx: ExecutorContext
) -> ExecutorResult[TimeEntry]:
    require(options.id, "id", "Time entry ID")
    fields = compact(
        {
            "time": options.time,
            "billable_time": options.billable_time,
            "date": options.date,
            "note": options.note,
        }
    )
    if not fields:
        raise no_updates_error()
    _validate_minutes(options.time, "time")

    response = await ctx.api.update_time_entry(options.id, fields)
    return ExecutorResult(data=TimeEntry.from_resource(response.item()))


async def delete_time_entry(
    options: DeleteTimeEntryOptions, ctx: ExecutorContext
) -> ExecutorResult[dict[str, Any]]:
    require(options.id, "id", "Time entry ID")
    await ctx.api.delete_time_entry(options.id)
    return ExecutorResult(data={"id": options.id, "deleted": True})
