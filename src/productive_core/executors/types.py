"""
Executor Types

Result and option types shared by all executors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from src.productive_api.models import JsonApiResource, PaginationMeta
from src.productive_core.resolution import ResolvedInfo

T = TypeVar("T")


@dataclass(frozen=True)
class ExecutorResult(Generic[T]):
    """
    Outcome of an executor call.

    `resolved` is set only when at least one identifier was resolved.
    """

    data: T
    meta: PaginationMeta | None = None
    included: list[JsonApiResource] | None = None
    resolved: dict[str, ResolvedInfo] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"data": _dump(self.data)}
        if self.meta is not None:
            result["meta"] = self.meta.model_dump(exclude_none=True)
        if self.included:
            result["included"] = [resource.model_dump() for resource in self.included]
        if self.resolved:
            result["resolved"] = {key: info.to_dict() for key, info in self.resolved.items()}
        return result


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump()
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, list):
        return [_dump(item) for item in value]
    return value


@dataclass
class PaginationOptions:
    """Common list options. `additional_filters` are raw API filters."""

    page: int = 1
    per_page: int = 100
    sort: str | None = None
    additional_filters: dict[str, str] = field(default_factory=dict)
