"""Throttle — atomic fixed-window request counting."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from flow_redis.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from flow_redis.client import StoreClient

logger = logging.getLogger(__name__)

CATEGORY = "rate_limit"


@dataclass(frozen=True)
class RateLimitStatus:
    """Outcome of a single rate limit check.

    Attributes:
        should_block:      ``True`` if the caller must reject the request.
        remaining_count:   Requests still admitted in the current window
                           (``0`` whenever ``should_block`` is set).
        resets_in_seconds: Seconds until the window ends.
    """

    should_block: bool
    remaining_count: int
    resets_in_seconds: int


class Throttle:
    """Fixed-window limiter whose check runs as one Redis script.

    Each check increments a counter under ``rate_limit:<identifier>``.
    The first increment of a window arms the key's expiry; when the key
    expires the window restarts.  Increment, TTL read, expiry arming and
    the decision all happen server-side, so concurrent callers never
    interleave on the same counter.

    Parameters:
        client:         Shared store client.
        block_at_limit: Also block the request that brings the count
                        exactly to ``limit`` when it is not the first in
                        the window.  Defaults to
                        ``client.params.rate_limit.block_at_limit``.
    """

    def __init__(self, client: StoreClient, *, block_at_limit: bool | None = None) -> None:
        self._client = client
        if block_at_limit is None:
            block_at_limit = client.params.rate_limit.block_at_limit
        self.block_at_limit = block_at_limit

    def key(self, identifier: str) -> str:
        return self._client.key(CATEGORY, identifier)

    async def check_and_consume(
        self,
        identifier: str,
        limit: int,
        window_seconds: int,
    ) -> RateLimitStatus:
        """Count one request for *identifier* and decide whether to block it.

        A ``limit`` of zero or less blocks every request.
        """
        if window_seconds <= 0:
            raise InvalidArgumentError("rate_limit", "window_seconds must be a positive integer")

        blocked, remaining, ttl = await self._client.run_script(
            "throttle",
            keys=[self.key(identifier)],
            args=[int(limit), int(window_seconds), int(self.block_at_limit)],
        )
        status = RateLimitStatus(
            should_block=int(blocked) == 1,
            remaining_count=int(remaining),
            resets_in_seconds=int(ttl),
        )
        logger.debug(
            "Rate limit %r: block=%s remaining=%d reset=%ds",
            identifier,
            status.should_block,
            status.remaining_count,
            status.resets_in_seconds,
        )
        return status

    async def reset(self, identifier: str) -> None:
        """Drop the counter so the next check opens a fresh window."""
        await self._client.redis.unlink(self.key(identifier))

    async def clear(self) -> int:
        """Delete every rate limit counter.  Returns the number removed."""
        return await self._client.delete_category(CATEGORY)
