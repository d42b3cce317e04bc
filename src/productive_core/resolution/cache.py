"""
Resolver Caches

In-memory (process lifetime) and Redis-backed implementations of the
ResolverCache protocol.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from src.productive_core.resolution.protocols import ResolvedInfo

logger = logging.getLogger(__name__)


class InMemoryResolverCache:
    """Unbounded dict cache. Safe under interleaved asyncio tasks."""

    def __init__(self) -> None:
        self._entries: dict[str, ResolvedInfo] = {}

    async def get(self, key: str) -> ResolvedInfo | None:
        return self._entries.get(key)

    async def set(self, key: str, value: ResolvedInfo) -> None:
        self._entries[key] = value

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class RedisResolverCache:
    """
    Persistent resolver cache on Redis.

    Values are stored as JSON with a TTL. Redis errors are logged and
    treated as cache misses so that resolution still works without Redis.
    """

    def __init__(self, client: Any, ttl_seconds: int = 86400):
        """
        Initialize with a redis client.

        Args:
            client: redis.asyncio client created with decode_responses=True
            ttl_seconds: Expiry for cache entries (default 24 hours)
        """
        self._client = client
        self._ttl_seconds = ttl_seconds

    @classmethod
    def from_url(cls, redis_url: str, ttl_seconds: int = 86400) -> RedisResolverCache:
        """Create a cache from a redis:// URL. The connection is opened lazily."""
        import redis.asyncio as redis

        client = redis.from_url(redis_url, decode_responses=True)
        return cls(client, ttl_seconds=ttl_seconds)

    async def get(self, key: str) -> ResolvedInfo | None:
        try:
            data = await self._client.get(key)
        except Exception as e:
            logger.warning(f"Redis get error: {e}")
            return None
        if not data:
            return None
        try:
            return ResolvedInfo.from_dict(json.loads(data))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring malformed resolver cache entry {key}: {e}")
            return None

    async def set(self, key: str, value: ResolvedInfo) -> None:
        try:
            await self._client.set(key, json.dumps(value.to_dict()), ex=self._ttl_seconds)
        except Exception as e:
            logger.warning(f"Redis set error: {e}")

    async def close(self) -> None:
        await self._client.aclose()
