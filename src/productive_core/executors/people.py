"""
People Executors
"""

from __future__ import annotations

from dataclasses import dataclass

from src.productive_api.models import Person
from src.productive_core.context import ExecutorContext
from src.productive_core.executors.helpers import (
    map_enum,
    resolve_field,
    resolved_or_none,
    set_filter,
)
from src.productive_core.executors.types import ExecutorResult, PaginationOptions
from src.productive_core.resolution import ResolvedInfo, ResourceType

PERSON_TYPE_MAP = {"user": "1", "contact": "2", "placeholder": "3"}
STATUS_MAP = {"active": "1", "deactivated": "2", "inactive": "2"}


@dataclass
class ListPeopleOptions(PaginationOptions):
    company_id: str | None = None
    project_id: str | None = None
    role: str | None = None
    team: str | None = None
    person_type: str | None = None  # user | contact | placeholder
    status: str | None = None  # active | deactivated


@dataclass
class GetPersonOptions:
    id: str


def build_people_filters(options: ListPeopleOptions) -> dict[str, str]:
    filter = dict(options.additional_filters)
    set_filter(filter, "company_id", options.company_id)
    set_filter(filter, "project_id", options.project_id)
    set_filter(filter, "role_id", options.role)
    set_filter(filter, "team", options.team)
    set_filter(filter, "person_type", map_enum(PERSON_TYPE_MAP, options.person_type))
    set_filter(filter, "status", map_enum(STATUS_MAP, options.status))
    return filter


async def list_people(
    options: ListPeopleOptions, ctx: ExecutorContext
) -> ExecutorResult[list[Person]]:
    resolution = await ctx.resolver.resolve_filters(build_people_filters(options))
    response = await ctx.api.get_people(
        page=options.page,
        per_page=options.per_page,
        filter=resolution.resolved,
        sort=options.sort,
    )
    return ExecutorResult(
        data=[Person.from_resource(resource) for resource in response.items()],
        meta=response.meta,
        resolved=resolved_or_none(resolution.metadata),
    )


async def get_person(options: GetPersonOptions, ctx: ExecutorContext) -> ExecutorResult[Person]:
    """Get a person by ID, email or name."""
    metadata: dict[str, ResolvedInfo] = {}
    person_id = await resolve_field(ctx, options.id, ResourceType.PERSON, "id", metadata)
    response = await ctx.api.get_person(person_id)
    return ExecutorResult(
        data=Person.from_resource(response.item()),
        resolved=resolved_or_none(metadata),
    )
