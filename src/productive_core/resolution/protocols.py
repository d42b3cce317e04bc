"""
Resolution Protocols

Data types and interfaces for resolving human-friendly identifiers
(emails, names, project codes) to Productive numeric IDs.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class ResourceType(str, Enum):
    """Resolvable resource kinds."""

    PERSON = "person"
    COMPANY = "company"
    PROJECT = "project"
    SERVICE = "service"
    DEAL = "deal"


@dataclass(frozen=True)
class ResolvedInfo:
    """
    A successful resolution.

    `label` is for display only and is never used for further lookups.
    """

    query: str  # Identifier as supplied (e.g., "jane@example.com")
    id: str  # Canonical numeric ID (e.g., "12345")
    label: str  # Display name (e.g., "Jane Doe")
    type: ResourceType

    def to_dict(self) -> dict[str, str]:
        return {
            "query": self.query,
            "id": self.id,
            "label": self.label,
            "type": self.type.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResolvedInfo:
        return cls(
            query=str(data["query"]),
            id=str(data["id"]),
            label=str(data.get("label", "")),
            type=ResourceType(data["type"]),
        )


@dataclass(frozen=True)
class SearchMatch:
    """A candidate returned by a search strategy, in remote relevance order."""

    id: str
    label: str
    exact: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "exact": self.exact}


@dataclass(frozen=True)
class ResolutionQuery:
    """
    A lookup request. Equal (query, type, scope) triples share a cache entry.
    """

    query: str
    type: ResourceType
    scope: Mapping[str, str] | None = None

    def cache_key(self, namespace: str) -> str:
        """Deterministic key, namespaced by organization."""
        payload = json.dumps(
            {
                "type": self.type.value,
                "query": self.query,
                "scope": {k: str(v) for k, v in sorted((self.scope or {}).items())},
            },
            separators=(",", ":"),
        )
        return f"resolve:{namespace}:{payload}"


@dataclass(frozen=True)
class FilterResolution:
    """Result of resolving a filter map."""

    resolved: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, ResolvedInfo] = field(default_factory=dict)


# Per-type remote search: (api, query, scope) -> matches ordered by relevance
SearchStrategy = Callable[..., Awaitable[list[SearchMatch]]]


@runtime_checkable
class ResolverCache(Protocol):
    """
    Storage for resolutions.

    The resolver never evicts; bounding size or TTL is the implementation's
    responsibility.
    """

    async def get(self, key: str) -> ResolvedInfo | None: ...

    async def set(self, key: str, value: ResolvedInfo) -> None: ...


@runtime_checkable
class Resolver(Protocol):
    """
    Protocol for resource resolution.

    Implemented by ResourceResolver and by NoopResolver.
    """

    async def resolve_value(
        self,
        identifier: str,
        type: ResourceType | str,
        scope: Mapping[str, str] | None = None,
    ) -> str:
        """
        Resolve an identifier to a canonical ID.

        Numeric IDs are returned unchanged without a lookup.
        """
        ...

    async def resolve_info(
        self,
        identifier: str,
        type: ResourceType | str,
        scope: Mapping[str, str] | None = None,
    ) -> ResolvedInfo | None:
        """Like resolve_value, but returns the full resolution (None for numeric IDs)."""
        ...

    async def resolve_filters(
        self,
        filter: Mapping[str, Any],
        type_mapping: Mapping[str, ResourceType] | None = None,
    ) -> FilterResolution:
        """Resolve every mapped, non-numeric value of a filter map."""
        ...

    async def search(
        self,
        query: str,
        type: ResourceType | str | None = None,
        scope: Mapping[str, str] | None = None,
    ) -> list[SearchMatch]:
        """Return all candidates for a query."""
        ...
