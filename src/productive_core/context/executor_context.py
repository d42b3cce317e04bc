"""
Executor Context

Dependency bundle (API client, resolver, tenant configuration) built once
per command or request and passed into every executor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from src.productive_api.client import ProductiveApi
from src.productive_api.config import ProductiveConfig
from src.productive_core.resolution import (
    AmbiguityPolicy,
    NoopResolver,
    Resolver,
    ResolverCache,
    ResourceResolver,
    create_resource_resolver,
)


@dataclass(frozen=True)
class ExecutorConfig:
    """Tenant configuration visible to executors."""

    organization_id: str
    user_id: str | None = None


@dataclass(frozen=True)
class ExecutorContext:
    api: ProductiveApi
    resolver: Resolver
    config: ExecutorConfig


@runtime_checkable
class CommandContextLike(Protocol):
    """A human-facing command session (see src.cli.session.CommandSession)."""

    @property
    def api(self) -> ProductiveApi: ...

    @property
    def config(self) -> ProductiveConfig: ...

    @property
    def resolver_cache(self) -> ResolverCache | None: ...


@runtime_checkable
class HandlerContextLike(Protocol):
    """A request-scoped agent-facing context (see the MCP server HandlerContext)."""

    @property
    def api(self) -> ProductiveApi: ...

    @property
    def organization_id(self) -> str: ...

    @property
    def user_id(self) -> str | None: ...

    @property
    def resolver_cache(self) -> ResolverCache | None: ...

    @property
    def resolution_enabled(self) -> bool: ...

    @property
    def strict(self) -> bool: ...


def from_command_context(session: CommandContextLike) -> ExecutorContext:
    """Build an ExecutorContext from a CLI command session."""
    config = session.config
    organization_id = str(config.org_id or session.api.organization_id)
    resolver = create_resource_resolver(
        session.api,
        config,
        cache=session.resolver_cache,
        organization_id=organization_id,
    )
    return ExecutorContext(
        api=session.api,
        resolver=resolver,
        config=ExecutorConfig(organization_id=organization_id, user_id=config.user_id),
    )


def from_handler_context(handler: HandlerContextLike) -> ExecutorContext:
    """Build an ExecutorContext from a request-scoped handler context."""
    resolver: Resolver
    if handler.resolution_enabled:
        resolver = ResourceResolver(
            handler.api,
            handler.resolver_cache,
            namespace=handler.organization_id,
            policy=AmbiguityPolicy.STRICT if handler.strict else AmbiguityPolicy.FIRST,
        )
    else:
        resolver = NoopResolver()
    return ExecutorContext(
        api=handler.api,
        resolver=resolver,
        config=ExecutorConfig(
            organization_id=handler.organization_id,
            user_id=handler.user_id,
        ),
    )


def create_test_context(
    api: ProductiveApi,
    *,
    resolver: Resolver | None = None,
    organization_id: str = "test-org",
    user_id: str | None = None,
) -> ExecutorContext:
    """ExecutorContext with a NoopResolver unless one is given."""
    return ExecutorContext(
        api=api,
        resolver=resolver if resolver is not None else NoopResolver(),
        config=ExecutorConfig(organization_id=organization_id, user_id=user_id),
    )
