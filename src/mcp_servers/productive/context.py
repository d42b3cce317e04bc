"""
Handler Context

Request-scoped context handed to the executors by the tool handlers.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.productive_api.client import ProductiveApi
from src.productive_core.resolution import ResolverCache


@dataclass(frozen=True)
class HandlerContext:
    """
    Everything one tool call needs to build an ExecutorContext.

    Attributes:
        api: Client for the organization the server is bound to
        organization_id: Tenant id, also the resolver cache namespace
        user_id: Acting person, default for new time entries
        resolver_cache: Cache shared across requests
        resolution_enabled: False to pass identifiers through unchanged
        strict: Reject ambiguous matches
    """

    api: ProductiveApi
    organization_id: str
    user_id: str | None = None
    resolver_cache: ResolverCache | None = None
    resolution_enabled: bool = True
    strict: bool = False

    def to_span_attributes(self) -> dict[str, str | bool]:
        """Convert to OTEL span attributes."""
        attrs: dict[str, str | bool] = {
            "productive.organization_id": self.organization_id,
            "productive.resolution_enabled": self.resolution_enabled,
        }
        if self.user_id:
            attrs["productive.user_id"] = self.user_id
        return attrs
