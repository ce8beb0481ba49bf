"""Shared test fixtures."""

import asyncio

import fakeredis
import pytest

from flow_redis import RedisPlugin, RedisPluginParams
from flow_redis.stores.models import FlowOperation, FlowState, SpanData, TraceData


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


@pytest.fixture
def fake_redis(fake_server):
    return fakeredis.FakeAsyncRedis(server=fake_server, decode_responses=True)


@pytest.fixture
def params():
    return RedisPluginParams(connection_string="redis://test:6379", list_page_size=10)


@pytest.fixture
async def plugin(params, fake_redis):
    plugin = RedisPlugin(params)
    await plugin.initialize(fake_redis)
    yield plugin
    await plugin.close()


@pytest.fixture
def expire_now(fake_redis):
    """Return a coroutine function that lets a key reach the end of its TTL."""

    async def _expire(key: str) -> None:
        await fake_redis.pexpire(key, 1)
        await asyncio.sleep(0.01)

    return _expire


def _flow_state(flow_id: str, **overrides) -> FlowState:
    data = {
        "flow_id": flow_id,
        "start_time": 1_700_000_000.0,
        "operation": FlowOperation(name=f"flows/{flow_id}"),
        "input": {"subject": "redis"},
    }
    data.update(overrides)
    return FlowState(**data)


def _trace(trace_id: str) -> TraceData:
    span = SpanData(
        span_id="s1",
        trace_id=trace_id,
        start_time=1.0,
        end_time=2.0,
        display_name="generate",
        attributes={"genkit:type": "action"},
    )
    return TraceData(trace_id=trace_id, display_name="expensiveFlow", spans={"s1": span})


@pytest.fixture
def make_flow_state():
    return _flow_state


@pytest.fixture
def make_trace():
    return _trace
