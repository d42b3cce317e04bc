"""
Resolver Factory

Creates the resolver and resolver cache based on configuration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.productive_core.resolution.cache import InMemoryResolverCache, RedisResolverCache
from src.productive_core.resolution.protocols import Resolver, ResolverCache
from src.productive_core.resolution.resolver import (
    AmbiguityPolicy,
    NoopResolver,
    ResourceResolver,
)

if TYPE_CHECKING:
    from src.productive_api.client import ProductiveApi
    from src.productive_api.config import ProductiveConfig

logger = logging.getLogger(__name__)


def create_resolver_cache(config: ProductiveConfig) -> ResolverCache:
    """
    Create the resolver cache.

    Uses Redis when `resolver_cache_url` is set, otherwise an in-memory
    cache living as long as the process.
    """
    if config.resolver_cache_url:
        logger.info("Using Redis resolver cache")
        return RedisResolverCache.from_url(
            config.resolver_cache_url,
            ttl_seconds=config.resolver_cache_ttl_seconds,
        )
    return InMemoryResolverCache()


def create_resource_resolver(
    api: ProductiveApi,
    config: ProductiveConfig,
    cache: ResolverCache | None = None,
    organization_id: str | None = None,
) -> Resolver:
    """
    Create a resolver based on configuration.

    Args:
        api: Productive API client
        config: Productive configuration
        cache: Optional cache shared across resolvers
        organization_id: Cache namespace (defaults to config.org_id)

    Returns:
        ResourceResolver, or NoopResolver when resolution is disabled
    """
    if not config.resolution_enabled:
        logger.info("Resource resolution disabled")
        return NoopResolver()

    policy = AmbiguityPolicy.STRICT if config.resolve_strict else AmbiguityPolicy.FIRST
    return ResourceResolver(
        api,
        cache,
        namespace=organization_id or config.org_id or "default",
        policy=policy,
    )
