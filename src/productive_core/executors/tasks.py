"""
Task Executors

Listing defaults to open tasks. Task IDs are numeric; tasks are not a
resolvable resource type.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.productive_api.models import Task
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

STATUS_MAP = {"open": "1", "completed": "2", "done": "2"}
OVERDUE_STATUS = "2"

FILTER_TYPE_MAPPING: dict[str, ResourceType] = {
    "assignee_id": ResourceType.PERSON,
    "creator_id": ResourceType.PERSON,
    "project_id": ResourceType.PROJECT,
    "company_id": ResourceType.COMPANY,
}

DEFAULT_INCLUDE = ["project", "assignee", "workflow_status"]


@dataclass
class ListTasksOptions(PaginationOptions):
    assignee_id: str | None = None
    creator_id: str | None = None
    project_id: str | None = None
    company_id: str | None = None
    board_id: str | None = None
    task_list_id: str | None = None
    parent_task_id: str | None = None
    workflow_status_id: str | None = None
    status: str | None = None  # open (default) | completed | done
    overdue: bool = False
    due_date: str | None = None
    due_before: str | None = None
    due_after: str | None = None
    include: list[str] | None = None


@dataclass
class GetTaskOptions:
    id: str
    include: list[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))


@dataclass
class CreateTaskOptions:
    title: str | None = None
    project_id: str | None = None
    task_list_id: str | None = None
    assignee_id: str | None = None
    description: str | None = None
    due_date: str | None = None
    start_date: str | None = None
    initial_estimate: int | None = None
    workflow_status_id: str | None = None
    private: bool | None = None


@dataclass
class UpdateTaskOptions:
    id: str = ""
    title: str | None = None
    description: str | None = None
    due_date: str | None = None
    start_date: str | None = None
    assignee_id: str | None = None
    workflow_status_id: str | None = None
    initial_estimate: int | None = None
    closed: bool | None = None


def build_task_filters(options: ListTasksOptions) -> dict[str, str]:
    filter = dict(options.additional_filters)
    set_filter(filter, "assignee_id", options.assignee_id)
    set_filter(filter, "creator_id", options.creator_id)
    set_filter(filter, "project_id", options.project_id)
    set_filter(filter, "company_id", options.company_id)
    set_filter(filter, "board_id", options.board_id)
    set_filter(filter, "task_list_id", options.task_list_id)
    set_filter(filter, "parent_task_id", options.parent_task_id)
    set_filter(filter, "workflow_status_id", options.workflow_status_id)
    set_filter(filter, "status", map_enum(STATUS_MAP, options.status or "open"))
    if options.overdue:
        filter["overdue_status"] = OVERDUE_STATUS
    set_filter(filter, "due_date_on", options.due_date)
    set_filter(filter, "due_date_before", options.due_before)
    set_filter(filter, "due_date_after", options.due_after)
    return filter


async def list_tasks(options: ListTasksOptions, ctx: ExecutorContext) -> ExecutorResult[list[Task]]:
    resolution = await ctx.resolver.resolve_filters(
        build_task_filters(options), FILTER_TYPE_MAPPING
    )
    response = await ctx.api.get_tasks(
        page=options.page,
        per_page=options.per_page,
        filter=resolution.resolved,
        sort=options.sort,
        include=options.include if options.include is not None else DEFAULT_INCLUDE,
    )
    return ExecutorResult(
        data=[Task.from_resource(resource) for resource in response.items()],
        meta=response.meta,
        included=response.included,
        resolved=resolved_or_none(resolution.metadata),
    )


async def get_task(options: GetTaskOptions, ctx: ExecutorContext) -> ExecutorResult[Task]:
    response = await ctx.api.get_task(options.id, include=options.include)
    return ExecutorResult(data=Task.from_resource(response.item()), included=response.included)


async def create_task(options: CreateTaskOptions, ctx: ExecutorContext) -> ExecutorResult[Task]:
    require(options.title, "title", "Task title")
    require(options.project_id, "project_id", "Project")
    require(options.task_list_id, "task_list_id", "Task list")

    metadata: dict[str, ResolvedInfo] = {}
    project_id = await resolve_field(
        ctx, options.project_id, ResourceType.PROJECT, "project_id", metadata
    )
    assignee_id = await resolve_field(
        ctx, options.assignee_id, ResourceType.PERSON, "assignee_id", metadata
    )

    response = await ctx.api.create_task(
        compact(
            {
                "title": options.title,
                "project_id": project_id,
                "task_list_id": options.task_list_id,
                "assignee_id": assignee_id,
                "description": options.description,
                "due_date": options.due_date,
                "start_date": options.start_date,
                "initial_estimate": options.initial_estimate,
                "workflow_status_id": options.workflow_status_id,
                "private": options.private,
            }
        )
    )
    return ExecutorResult(
        data=Task.from_resource(response.item()),
        resolved=resolved_or_none(metadata),
    )


async def update_task(options: UpdateTaskOptions, ctx: ExecutorContext) -> ExecutorResult[Task]:
    require(options.id, "id", "Task ID")
    fields = compact(
        {
            "title": options.title,
            "description": options.description,
            "due_date": options.due_date,
            "start_date": options.start_date,
            "assignee_id": options.assignee_id,
            "workflow_status_id": options.workflow_status_id,
            "initial_estimate": options.initial_estimate,
            "closed": options.closed,
        }
    )
    if not fields:
        raise no_updates_error()

    metadata: dict[str, ResolvedInfo] = {}
    if "assignee_id" in fields:
        fields["assignee_id"] = await resolve_field(
            ctx, options.assignee_id, ResourceType.PERSON, "assignee_id", metadata
        )

    response = await ctx.api.update_task(options.id, fields)
    return ExecutorResult(
        data=Task.from_resource(response.item()),
        resolved=resolved_or_none(metadata),
    )
