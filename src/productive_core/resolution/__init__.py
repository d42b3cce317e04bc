"""
Resource Resolution

Turns human-friendly identifiers (emails, names, project and deal numbers)
into the numeric IDs the Productive API expects.

Usage:
    from src.productive_core.resolution import create_resource_resolver

    resolver = create_resource_resolver(api, config)
    person_id = await resolver.resolve_value("jane@example.com", "person")
"""

from src.productive_core.resolution.cache import InMemoryResolverCache, RedisResolverCache
from src.productive_core.resolution.classifier import (
    DetectionResult,
    detect_resource_type,
    is_numeric_id,
    needs_resolution,
)
from src.productive_core.resolution.errors import ResolveError, ResolveErrorKind
from src.productive_core.resolution.factory import (
    create_resolver_cache,
    create_resource_resolver,
)
from src.productive_core.resolution.mappings import (
    DEFAULT_FILTER_TYPE_MAPPING,
    SCOPED_FILTER_KEYS,
)
from src.productive_core.resolution.protocols import (
    FilterResolution,
    ResolutionQuery,
    ResolvedInfo,
    Resolver,
    ResolverCache,
    ResourceType,
    SearchMatch,
)
from src.productive_core.resolution.resolver import (
    AmbiguityPolicy,
    NoopResolver,
    ResourceResolver,
)
from src.productive_core.resolution.strategies import SEARCH_STRATEGIES

__all__ = [
    "AmbiguityPolicy",
    "DEFAULT_FILTER_TYPE_MAPPING",
    "DetectionResult",
    "FilterResolution",
    "InMemoryResolverCache",
    "NoopResolver",
    "RedisResolverCache",
    "ResolutionQuery",
    "ResolveError",
    "ResolveErrorKind",
    "ResolvedInfo",
    "Resolver",
    "ResolverCache",
    "ResourceResolver",
    "ResourceType",
    "SCOPED_FILTER_KEYS",
    "SEARCH_STRATEGIES",
    "SearchMatch",
    "create_resolver_cache",
    "create_resource_resolver",
    "detect_resource_type",
    "is_numeric_id",
    "needs_resolution",
]
