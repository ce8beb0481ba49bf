"""Record stores for flow state and trace data."""

from flow_redis.stores.base import ListQuery, ListResult, RecordStore
from flow_redis.stores.memory import InMemoryRecordStore
from flow_redis.stores.models import FlowState, SpanData, TraceData
from flow_redis.stores.redis_store import FlowStateStore, RedisRecordStore, TraceStore

__all__ = [
    "FlowState",
    "FlowStateStore",
    "InMemoryRecordStore",
    "ListQuery",
    "ListResult",
    "RecordStore",
    "RedisRecordStore",
    "SpanData",
    "TraceData",
    "TraceStore",
]
