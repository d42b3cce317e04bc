"""Helpers shared by the executor modules."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.productive_core.context import ExecutorContext
from src.productive_core.resolution import ResolvedInfo, ResourceType


def map_enum(mapping: Mapping[str, str], value: str | None) -> str | None:
    """Map an enum word (case-insensitive) to its API value. Unknown words map to None."""
    if not value:
        return None
    return mapping.get(value.lower())


def set_filter(filter: dict[str, str], key: str, value: Any) -> None:
    """Set `filter[key]` when `value` is non-empty."""
    if value is None or value == "":
        return
    filter[key] = str(value)


def compact(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Drop None values."""
    return {key: value for key, value in fields.items() if value is not None}


def resolved_or_none(metadata: Mapping[str, ResolvedInfo]) -> dict[str, ResolvedInfo] | None:
    return dict(metadata) if metadata else None


async def resolve_field(
    ctx: ExecutorContext,
    value: str | None,
    type: ResourceType,
    key: str,
    metadata: dict[str, ResolvedInfo],
    scope: Mapping[str, str] | None = None,
) -> str | None:
    """
    Resolve a single identifier, recording metadata under `key`.

    None stays None; numeric IDs are returned unchanged.
    """
    if value is None:
        return None
    info = await ctx.resolver.resolve_info(str(value), type, scope)
    if info is None:
        return str(value)
    metadata[key] = info
    return info.id
