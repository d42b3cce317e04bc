"""
Resolve Executor

Looks up candidates for a human-friendly identifier without performing
any other operation. Backs the `resolve` command and tool action.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.productive_core.context import ExecutorContext
from src.productive_core.executors.errors import require
from src.productive_core.executors.helpers import resolve_field, resolved_or_none
from src.productive_core.executors.types import ExecutorResult
from src.productive_core.resolution import ResolvedInfo, ResourceType, SearchMatch


@dataclass
class ResolveOptions:
    query: str = ""
    type: str | None = None  # detected from the query format when omitted
    project_id: str | None = None  # scope for service lookups
    first: bool = False  # return only the best match


async def resolve_identifier(
    options: ResolveOptions, ctx: ExecutorContext
) -> ExecutorResult[list[SearchMatch]]:
    require(options.query, "query", "Query")
    resource_type = ResourceType(options.type) if options.type else None

    metadata: dict[str, ResolvedInfo] = {}
    project_id = await resolve_field(
        ctx, options.project_id, ResourceType.PROJECT, "project_id", metadata
    )
    scope = {"project_id": project_id} if project_id else None

    matches = await ctx.resolver.search(options.query, resource_type, scope)
    if options.first:
        matches = matches[:1]
    return ExecutorResult(data=matches, resolved=resolved_or_none(metadata))
