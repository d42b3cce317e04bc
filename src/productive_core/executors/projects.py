"""
Project Executors
"""

from __future__ import annotations

from dataclasses import dataclass

from src.productive_api.models import Project
from src.productive_core.context import ExecutorContext
from src.productive_core.executors.helpers import (
    map_enum,
    resolve_field,
    resolved_or_none,
    set_filter,
)
from src.productive_core.executors.types import ExecutorResult, PaginationOptions
from src.productive_core.resolution import ResolvedInfo, ResourceType

PROJECT_TYPE_MAP = {"internal": "1", "client": "2"}
STATUS_MAP = {"active": "1", "archived": "2"}


@dataclass
class ListProjectsOptions(PaginationOptions):
    company_id: str | None = None
    responsible_id: str | None = None
    person_id: str | None = None
    project_type: str | None = None  # internal | client
    status: str | None = None  # active | archived


@dataclass
class GetProjectOptions:
    id: str  # numeric ID, PRJ-123 / P-123, or name


def build_project_filters(options: ListProjectsOptions) -> dict[str, str]:
    filter = dict(options.additional_filters)
    set_filter(filter, "company_id", options.company_id)
    set_filter(filter, "responsible_id", options.responsible_id)
    set_filter(filter, "person_id", options.person_id)
    set_filter(filter, "project_type", map_enum(PROJECT_TYPE_MAP, options.project_type))
    set_filter(filter, "status", map_enum(STATUS_MAP, options.status))
    return filter


async def list_projects(
    options: ListProjectsOptions, ctx: ExecutorContext
) -> ExecutorResult[list[Project]]:
    resolution = await ctx.resolver.resolve_filters(build_project_filters(options))
    response = await ctx.api.get_projects(
        page=options.page,
        per_page=options.per_page,
        filter=resolution.resolved,
        sort=options.sort,
    )
    return ExecutorResult(
        data=[Project.from_resource(resource) for resource in response.items()],
        meta=response.meta,
        resolved=resolved_or_none(resolution.metadata),
    )


async def get_project(options: GetProjectOptions, ctx: ExecutorContext) -> ExecutorResult[Project]:
    metadata: dict[str, ResolvedInfo] = {}
    project_id = await resolve_field(ctx, options.id, ResourceType.PROJECT, "id", metadata)
    response = await ctx.api.get_project(project_id)
    return ExecutorResult(
        data=Project.from_resource(response.item()),
        resolved=resolved_or_none(metadata),
    )
