"""Plugin configuration models.

These Pydantic models describe everything the plugin needs to connect
and lay out its keys.  Stores receive only their own ``StoreParams``.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

DEFAULT_CONNECTION_STRING = "redis://localhost:6379"
DEFAULT_KEY_PREFIX = "_flow_redis_"


def _default_connection_string() -> str:
    return os.getenv("REDIS_URL", DEFAULT_CONNECTION_STRING)


class StoreParams(BaseModel):
    """Per-store configuration.

    Attributes:
        storage_key: Name of the hash holding the records.  When omitted
                     the store falls back to its own default
                     (``"states"`` for flow state, ``"traces"`` for traces).
    """

    storage_key: str | None = None


class RateLimitParams(BaseModel):
    """Throttle configuration.

    Attributes:
        block_at_limit: Also block the request that brings the counter
                        exactly to the limit (unless it is the first one
                        in the window).  Off by default, so exactly
                        ``limit`` requests are admitted per window.
    """

    block_at_limit: bool = False


class RedisPluginParams(BaseModel):
    """Top-level plugin configuration.

    Attributes:
        connection_string: Redis URL.  Defaults to ``$REDIS_URL`` or
                           ``redis://localhost:6379``.
        key_prefix: Namespace prefix shared by every key the plugin owns.
        flow_state_store: Flow state store configuration.
        trace_store: Trace store configuration.
        rate_limit: Throttle configuration.
        list_page_size: ``HSCAN`` page size used when listing a whole
                        collection.
        purge_scan_count: ``SCAN`` batch size used by bulk purges.
    """

    connection_string: str = Field(default_factory=_default_connection_string)
    key_prefix: str = DEFAULT_KEY_PREFIX
    flow_state_store: StoreParams = Field(default_factory=StoreParams)
    trace_store: StoreParams = Field(default_factory=StoreParams)
    rate_limit: RateLimitParams = Field(default_factory=RateLimitParams)
    list_page_size: int = Field(default=1000, gt=0)
    purge_scan_count: int = Field(default=1000, gt=0)
