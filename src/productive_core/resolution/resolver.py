"""
Resource Resolver

Resolves human-friendly identifiers to canonical numeric IDs:
- Numeric fast path: digits are returned unchanged, no lookup
- Caching: one remote search per distinct (query, type, scope)
- In-flight coalescing: concurrent lookups of the same key share one search
- Filter maps: independent keys are resolved concurrently

This module does not log. Errors propagate to the caller unchanged.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from enum import Enum
from typing import Any

from src.productive_api.client import ProductiveApi
from src.productive_core.resolution.cache import InMemoryResolverCache
from src.productive_core.resolution.classifier import detect_resource_type, is_numeric_id
from src.productive_core.resolution.errors import ResolveError
from src.productive_core.resolution.mappings import (
    DEFAULT_FILTER_TYPE_MAPPING,
    SCOPED_FILTER_KEYS,
)
from src.productive_core.resolution.protocols import (
    FilterResolution,
    ResolutionQuery,
    ResolvedInfo,
    ResolverCache,
    ResourceType,
    SearchMatch,
    SearchStrategy,
)
from src.productive_core.resolution.strategies import SEARCH_STRATEGIES


class AmbiguityPolicy(str, Enum):
    """What to do when a search returns more than one match."""

    FIRST = "first"  # accept the remote's top-ranked match
    STRICT = "strict"  # raise Ambiguous unless exactly one match is exact


class ResourceResolver:
    """
    Resolver backed by the Productive search endpoints.

    Holds no global state: everything it uses is passed in at construction.
    """

    def __init__(
        self,
        api: ProductiveApi,
        cache: ResolverCache | None = None,
        *,
        namespace: str = "default",
        policy: AmbiguityPolicy = AmbiguityPolicy.FIRST,
        strategies: Mapping[ResourceType, SearchStrategy] | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            api: Productive API client used by the search strategies
            cache: Resolution cache (process-lifetime in-memory cache if omitted)
            namespace: Cache key namespace, normally the organization id
            policy: Ambiguity policy for multi-match searches
            strategies: Override of the per-type search table (tests)
        """
        self._api = api
        self._cache: ResolverCache = cache if cache is not None else InMemoryResolverCache()
        self._namespace = namespace
        self._policy = AmbiguityPolicy(policy)
        self._strategies = dict(strategies if strategies is not None else SEARCH_STRATEGIES)
        self._inflight: dict[str, asyncio.Future[ResolvedInfo]] = {}

    @property
    def cache(self) -> ResolverCache:
        return self._cache

    @property
    def policy(self) -> AmbiguityPolicy:
        return self._policy

    async def search(
        self,
        query: str,
        type: ResourceType | str | None = None,
        scope: Mapping[str, str] | None = None,
    ) -> list[SearchMatch]:
        """
        Return all candidates for a query, bypassing the cache.

        Numeric IDs are returned as the single exact match without a search.

        Args:
            query: Human-friendly identifier
            type: Resource type; detected from the query format when omitted
            scope: Optional narrowing context (e.g. {"project_id": "42"})

        Raises:
            ResolveError: UNKNOWN_TYPE if no type is given or detectable,
                NOT_FOUND if there are no candidates
        """
        if is_numeric_id(query):
            return [SearchMatch(id=query, label=query, exact=True)]

        if type is None:
            detection = detect_resource_type(query)
            if detection is None:
                raise ResolveError.unknown_type(query)
            resource_type = detection.type
        else:
            resource_type = ResourceType(type)

        if not query.strip():
            raise ResolveError.not_found(query, resource_type)

        matches = await self._strategies[resource_type](self._api, query, scope)
        if not matches:
            raise ResolveError.not_found(query, resource_type)
        return matches

    async def resolve_value(
        self,
        identifier: str,
        type: ResourceType | str,
        scope: Mapping[str, str] | None = None,
    ) -> str:
        info = await self.resolve_info(identifier, type, scope)
        return identifier if info is None else info.id

    async def resolve_info(
        self,
        identifier: str,
        type: ResourceType | str,
        scope: Mapping[str, str] | None = None,
    ) -> ResolvedInfo | None:
        """
        Resolve an identifier, returning None on the numeric fast path.

        Raises:
            ResolveError: NOT_FOUND, or AMBIGUOUS under the strict policy
        """
        if is_numeric_id(identifier):
            return None

        resource_type = ResourceType(type)
        if not identifier or not identifier.strip():
            raise ResolveError.not_found(identifier, resource_type)

        key = ResolutionQuery(identifier, resource_type, scope).cache_key(self._namespace)
        cached = await self._cache.get(key)
        if cached is not None:
            return cached

        future = self._inflight.get(key)
        if future is None:
            future = asyncio.ensure_future(
                self._lookup(key, identifier, resource_type, scope)
            )
            self._inflight[key] = future
            future.add_done_callback(lambda _f, k=key: self._inflight.pop(k, None))

        # shield so one cancelled caller does not cancel the shared lookup
        return await asyncio.shield(future)

    async def resolve_filters(
        self,
        filter: Mapping[str, Any],
        type_mapping: Mapping[str, ResourceType] | None = None,
    ) -> FilterResolution:
        """
        Resolve every mapped, non-numeric value of a filter map.

        Unmapped keys and numeric values are copied unchanged. Keys in
        SCOPED_FILTER_KEYS are resolved after their scoping key, using its
        resolved value as scope. Any failure fails the whole call.

        Args:
            filter: API filter names to raw values
            type_mapping: Filter key to resource type (DEFAULT_FILTER_TYPE_MAPPING if None)

        Returns:
            FilterResolution with the substituted map and per-key metadata
        """
        mapping = DEFAULT_FILTER_TYPE_MAPPING if type_mapping is None else type_mapping
        resolved: dict[str, Any] = dict(filter)
        metadata: dict[str, ResolvedInfo] = {}

        pending = [
            key
            for key, value in filter.items()
            if key in mapping and isinstance(value, str) and not is_numeric_id(value)
        ]
        scoped = [key for key in pending if SCOPED_FILTER_KEYS.get(key) in filter]
        independent = [key for key in pending if key not in scoped]

        for wave in (independent, scoped):
            if not wave:
                continue
            results = await asyncio.gather(
                *(
                    self.resolve_info(filter[key], mapping[key], self._scope_for(key, resolved))
                    for key in wave
                ),
                return_exceptions=True,
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            for key, info in zip(wave, results):
                if info is not None:
                    resolved[key] = info.id
                    metadata[key] = info

        return FilterResolution(resolved=resolved, metadata=metadata)

    def _scope_for(self, key: str, resolved: Mapping[str, Any]) -> dict[str, str] | None:
        scope_key = SCOPED_FILTER_KEYS.get(key)
        if scope_key is None or resolved.get(scope_key) in (None, ""):
            return None
        return {scope_key: str(resolved[scope_key])}

    async def _lookup(
        self,
        key: str,
        identifier: str,
        resource_type: ResourceType,
        scope: Mapping[str, str] | None,
    ) -> ResolvedInfo:
        matches = await self._strategies[resource_type](self._api, identifier, scope)
        match = self._select(identifier, resource_type, matches)
        info = ResolvedInfo(
            query=identifier,
            id=match.id,
            label=match.label,
            type=resource_type,
        )
        await self._cache.set(key, info)
        return info

    def _select(
        self,
        identifier: str,
        resource_type: ResourceType,
        matches: list[SearchMatch],
    ) -> SearchMatch:
        if not matches:
            raise ResolveError.not_found(identifier, resource_type)
        if len(matches) == 1 or self._policy is AmbiguityPolicy.FIRST:
            return matches[0]

        exact = [match for match in matches if match.exact]
        if len(exact) == 1:
            return exact[0]
        raise ResolveError.ambiguous(identifier, resource_type, matches)


class NoopResolver:
    """
    Resolver that treats every identifier as already resolved.

    Used when resolution is disabled and in tests.
    """

    async def resolve_value(
        self,
        identifier: str,
        type: ResourceType | str,
        scope: Mapping[str, str] | None = None,
    ) -> str:
        return identifier

    async def resolve_info(
        self,
        identifier: str,
        type: ResourceType | str,
        scope: Mapping[str, str] | None = None,
    ) -> ResolvedInfo | None:
        return None

    async def resolve_filters(
        self,
        filter: Mapping[str, Any],
        type_mapping: Mapping[str, ResourceType] | None = None,
    ) -> FilterResolution:
        return FilterResolution(resolved=dict(filter), metadata={})

    async def search(
        self,
        query: str,
        type: ResourceType | str | None = None,
        scope: Mapping[str, str] | None = None,
    ) -> list[SearchMatch]:
        return [SearchMatch(id=query, label=query, exact=True)]
