"""flow_redis — Redis-backed flow state, trace storage, caching and rate limiting.

One connection handle, three primitives: an expiring JSON cache, an
atomic fixed-window rate limiter, and paginated record stores.
"""

from flow_redis.cache import Cache
from flow_redis.client import StoreClient
from flow_redis.config import RateLimitParams, RedisPluginParams, StoreParams
from flow_redis.exceptions import (
    FlowRedisError,
    InvalidArgumentError,
    MalformedRecordError,
    NotInitializedError,
)
from flow_redis.plugin import RedisPlugin
from flow_redis.throttle import RateLimitStatus, Throttle

__all__ = [
    "Cache",
    "FlowRedisError",
    "InvalidArgumentError",
    "MalformedRecordError",
    "NotInitializedError",
    "RateLimitParams",
    "RateLimitStatus",
    "RedisPlugin",
    "RedisPluginParams",
    "StoreClient",
    "StoreParams",
    "Throttle",
]
