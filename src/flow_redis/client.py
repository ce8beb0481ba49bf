"""StoreClient — the single connection handle every component shares."""

from __future__ import annotations

import logging
import re
from typing import Any

import redis.asyncio as redis
from redis.commands.core import AsyncScript

from flow_redis import scripts
from flow_redis.config import RedisPluginParams
from flow_redis.exceptions import NotInitializedError

logger = logging.getLogger(__name__)

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def escape_glob(value: str) -> str:
    """Escape Redis ``MATCH`` metacharacters so *value* matches literally."""
    return _GLOB_SPECIAL.sub(r"\\\1", value)


class StoreClient:
    """Owns the Redis connection, key naming and the server-side scripts.

    The client is inert until :meth:`initialize` is awaited.  Components
    receive the client at construction time and reach the connection
    through :attr:`redis`, which raises :class:`NotInitializedError` while
    there is no live connection.  There is no implicit lazy connect.

    Parameters:
        params: Plugin configuration.  Defaults to ``RedisPluginParams()``.
    """

    def __init__(self, params: RedisPluginParams | None = None) -> None:
        self.params = params or RedisPluginParams()
        self._redis: redis.Redis | None = None
        self._scripts: dict[str, AsyncScript] = {}

    # ── lifecycle ────────────────────────────────────────────

    async def initialize(self, connection: redis.Redis | None = None) -> None:
        """Connect to Redis and register the Lua scripts.

        Pass *connection* to reuse an existing client (any object speaking
        the ``redis.asyncio.Redis`` API).  It must decode responses to
        ``str``.  Connection errors propagate unchanged.
        """
        if connection is None:
            connection = redis.from_url(self.params.connection_string, decode_responses=True)
        await connection.ping()
        self._scripts = {
            "throttle": connection.register_script(scripts.THROTTLE),
            "storage_list": connection.register_script(scripts.STORAGE_LIST),
            "delete_by_pattern": connection.register_script(scripts.DELETE_BY_PATTERN),
        }
        self._redis = connection
        logger.info("Connected store client (key prefix %r)", self.params.key_prefix)

    async def close(self) -> None:
        """Close the connection.  Safe to call more than once."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            self._scripts = {}
            logger.info("Closed store client")

    @property
    def initialized(self) -> bool:
        return self._redis is not None

    @property
    def redis(self) -> redis.Redis:
        if self._redis is None:
            raise NotInitializedError()
        return self._redis

    # ── key naming ───────────────────────────────────────────

    def key(self, category: str, name: str) -> str:
        """Return the full key for *name* within *category*."""
        return f"{self.params.key_prefix}:{category}:{name}"

    def category_pattern(self, category: str, prefix: str = "") -> str:
        """``MATCH`` pattern for every key in *category* starting with *prefix*."""
        return f"{escape_glob(self.params.key_prefix)}:{category}:{escape_glob(prefix)}*"

    # ── scripts ──────────────────────────────────────────────

    async def run_script(self, name: str, keys: list[str], args: list[Any]) -> Any:
        """Evaluate a registered script atomically on the server."""
        if self._redis is None:
            raise NotInitializedError()
        return await self._scripts[name](keys=keys, args=args)

    # ── bulk purge ───────────────────────────────────────────

    async def delete_by_pattern(self, pattern: str) -> int:
        """Unlink every key matching *pattern*; return how many were removed.

        The keyspace is walked incrementally with ``SCAN`` inside one
        script.  An empty match set returns ``0``.
        """
        deleted = await self.run_script(
            "delete_by_pattern",
            keys=[],
            args=[pattern, self.params.purge_scan_count],
        )
        logger.info("Purged %d keys matching %r", deleted, pattern)
        return int(deleted)

    async def delete_category(self, category: str, prefix: str = "") -> int:
        """Purge every key of *category*, optionally only those starting with *prefix*."""
        return await self.delete_by_pattern(self.category_pattern(category, prefix))
