"""RedisPlugin — the central orchestrator and public API."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from flow_redis.cache import Cache
from flow_redis.client import StoreClient
from flow_redis.config import RedisPluginParams
from flow_redis.stores.redis_store import FlowStateStore, TraceStore
from flow_redis.throttle import RateLimitStatus, Throttle

if TYPE_CHECKING:
    import redis.asyncio as redis


class RedisPlugin:
    """Owns one :class:`StoreClient` and the components built on it.

    Provides stores for flow states and traces, plus the caching and rate
    limiting API.  Nothing touches Redis until :meth:`initialize` has been
    awaited; every call made before that raises
    :class:`~flow_redis.exceptions.NotInitializedError`.

    Parameters:
        params: Plugin configuration.  Defaults to ``RedisPluginParams()``.

    Example::

        async with RedisPlugin(RedisPluginParams(connection_string=url)) as plugin:
            if await plugin.rate_limit("expensiveFlow", 1, 60):
                ...
    """

    def __init__(self, params: RedisPluginParams | None = None) -> None:
        self.params = params or RedisPluginParams()
        self.client = StoreClient(self.params)
        self.flow_state_store = FlowStateStore(self.client, self.params.flow_state_store)
        self.trace_store = TraceStore(self.client, self.params.trace_store)
        self.cache = Cache(self.client)
        self.throttle = Throttle(self.client)

    # ── lifecycle ────────────────────────────────────────────

    async def initialize(self, connection: redis.Redis | None = None) -> None:
        """Connect the shared client.  See :meth:`StoreClient.initialize`."""
        await self.client.initialize(connection)

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> RedisPlugin:
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ── store maintenance ────────────────────────────────────

    async def clear_flow_store(self) -> int:
        """Delete all flow states, under every storage key.  Returns the number of keys removed."""
        return await self.client.delete_category(FlowStateStore.CATEGORY)

    async def clear_trace_store(self) -> int:
        """Delete all traces, under every storage key.  Returns the number of keys removed."""
        return await self.client.delete_category(TraceStore.CATEGORY)

    # ── cache ────────────────────────────────────────────────

    async def cache_get(self, key: str) -> Any | None:
        """Return the cached value, or ``None`` if missing or expired."""
        return await self.cache.get(key)

    async def cache_set(self, key: str, value: Any | None, ttl_seconds: int | None = None) -> None:
        """Cache *value*.  ``None`` deletes the key; no TTL means no expiry."""
        await self.cache.set(key, value, ttl_seconds)

    async def cache_delete(self, key: str) -> None:
        await self.cache.delete(key)

    async def cache_function(
        self,
        key: str,
        fn: Callable[[], Any] | Callable[[], Awaitable[Any]],
        ttl_seconds: int | None = None,
    ) -> Any:
        """Return the cached result of *fn*, calling it only on a cache miss."""
        return await self.cache.cache_function(key, fn, ttl_seconds)

    async def clear_cache(self, prefix: str | None = None) -> int:
        """Delete cached values, all of them or only keys starting with *prefix*."""
        return await self.cache.clear(prefix)

    # ── rate limiting ────────────────────────────────────────

    async def rate_limit(self, identifier: str, limit: int, window_seconds: int) -> bool:
        """Count one request for *identifier*; return ``True`` if it must be blocked.

        *identifier* is any string, e.g. a user id, a session id or a flow
        name.  At most *limit* requests are admitted per *window_seconds*.
        With ``RateLimitParams(block_at_limit=True)`` the request that
        brings the count up to *limit* is blocked as well, so only
        ``limit - 1`` get through when *limit* is above one.
        """
        status = await self.throttle.check_and_consume(identifier, limit, window_seconds)
        return status.should_block

    async def rate_limit_with_status(
        self,
        identifier: str,
        limit: int,
        window_seconds: int,
    ) -> RateLimitStatus:
        """Like :meth:`rate_limit`, also reporting remaining requests and reset time."""
        return await self.throttle.check_and_consume(identifier, limit, window_seconds)

    async def reset_rate_limit(self, identifier: str) -> None:
        await self.throttle.reset(identifier)

    async def clear_rate_limits(self) -> int:
        """Delete every rate limit counter."""
        return await self.throttle.clear()
