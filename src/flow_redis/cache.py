"""Cache — expiring JSON values under single keys."""

from __future__ import annotations

import inspect
import json
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from flow_redis.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from flow_redis.client import StoreClient

logger = logging.getLogger(__name__)

CATEGORY = "cache"


class Cache:
    """JSON get/set/delete over ``cache:<key>`` plus a read-through helper.

    ``None`` is never stored: passing it to :meth:`set` deletes the entry,
    and :meth:`get` returns it for a missing key.

    Parameters:
        client: Shared store client.
    """

    def __init__(self, client: StoreClient) -> None:
        self._client = client

    def key(self, key: str) -> str:
        return self._client.key(CATEGORY, key)

    async def get(self, key: str) -> Any | None:
        """Return the cached value, or ``None`` if absent or expired."""
        payload = await self._client.redis.get(self.key(key))
        if payload is None:
            logger.debug("Cache miss %r", key)
            return None
        logger.debug("Cache hit %r", key)
        return json.loads(payload)

    async def set(self, key: str, value: Any | None, ttl_seconds: int | None = None) -> None:
        """Store *value* as JSON.  Without *ttl_seconds* the entry never expires.

        A ``None`` value deletes the entry and ignores *ttl_seconds*.
        """
        if value is None:
            await self.delete(key)
            return
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise InvalidArgumentError("cache_set", "ttl_seconds must be a positive integer")
        await self._client.redis.set(self.key(key), json.dumps(value), ex=ttl_seconds)

    async def delete(self, key: str) -> None:
        """Remove an entry.  No-op if the key does not exist."""
        await self._client.redis.unlink(self.key(key))

    async def cache_function(
        self,
        key: str,
        fn: Callable[[], Any] | Callable[[], Awaitable[Any]],
        ttl_seconds: int | None = None,
    ) -> Any:
        """Return the value cached under *key*, computing it with *fn* on a miss.

        *fn* may be a plain or an async callable.  Concurrent misses are not
        de-duplicated: each may call *fn*, and the last write wins.  A
        ``None`` result is returned but not cached.
        """
        cached = await self.get(key)
        if cached is not None:
            return cached

        result = fn()
        if inspect.isawaitable(result):
            result = await result
        await self.set(key, result, ttl_seconds)
        return result

    async def clear(self, prefix: str | None = None) -> int:
        """Delete all cache entries, or only those whose key starts with *prefix*."""
        return await self._client.delete_category(CATEGORY, prefix or "")
