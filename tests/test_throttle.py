"""Tests for the fixed-window Throttle."""

import asyncio

import pytest

from flow_redis import InvalidArgumentError, RateLimitParams, RateLimitStatus, RedisPlugin
from flow_redis.throttle import Throttle


async def test_first_request_allowed(plugin):
    status = await plugin.rate_limit_with_status("alice", 3, 60)
    assert status == RateLimitStatus(should_block=False, remaining_count=2, resets_in_seconds=60)


async def test_admits_exactly_limit_requests(plugin):
    statuses = [await plugin.rate_limit_with_status("alice", 5, 60) for _ in range(5)]

    assert [s.should_block for s in statuses] == [False] * 5
    assert [s.remaining_count for s in statuses] == [4, 3, 2, 1, 0]

    over = await plugin.rate_limit_with_status("alice", 5, 60)
    assert over.should_block
    assert over.remaining_count == 0


async def test_reset_seconds_within_window(plugin):
    await plugin.rate_limit_with_status("alice", 5, 30)
    status = await plugin.rate_limit_with_status("alice", 5, 30)
    assert 0 < status.resets_in_seconds <= 30


async def test_window_armed_once(plugin, fake_redis):
    key = plugin.throttle.key("alice")
    await plugin.rate_limit("alice", 5, 60)
    await fake_redis.expire(key, 15)

    # Later hits in the same window must not push the expiry back out
    status = await plugin.rate_limit_with_status("alice", 5, 60)
    assert status.resets_in_seconds <= 15
    assert await fake_redis.ttl(key) <= 15


async def test_single_request_scenario(plugin, expire_now):
    assert await plugin.rate_limit("job", 1, 60) is False
    assert await plugin.rate_limit("job", 1, 60) is True

    await expire_now(plugin.throttle.key("job"))
    assert await plugin.rate_limit("job", 1, 60) is False


async def test_window_expiry_restarts_count(plugin, expire_now):
    for _ in range(4):
        await plugin.rate_limit("alice", 3, 60)

    await expire_now(plugin.throttle.key("alice"))
    status = await plugin.rate_limit_with_status("alice", 3, 60)
    assert not status.should_block
    assert status.remaining_count == 2


async def test_reset_rate_limit(plugin):
    for _ in range(3):
        await plugin.rate_limit("alice", 2, 60)
    assert await plugin.rate_limit("alice", 2, 60)

    await plugin.reset_rate_limit("alice")
    status = await plugin.rate_limit_with_status("alice", 2, 60)
    assert status == RateLimitStatus(should_block=False, remaining_count=1, resets_in_seconds=60)


async def test_rearms_counter_without_ttl(plugin, fake_redis):
    key = plugin.throttle.key("alice")
    await fake_redis.set(key, 2)

    status = await plugin.rate_limit_with_status("alice", 10, 45)
    assert not status.should_block
    assert status.remaining_count == 7
    assert status.resets_in_seconds == 45
    assert 0 < await fake_redis.ttl(key) <= 45


@pytest.mark.parametrize("limit", [0, -1])
async def test_non_positive_limit_always_blocks(plugin, limit):
    status = await plugin.rate_limit_with_status("alice", limit, 60)
    assert status.should_block
    assert status.remaining_count == 0


async def test_invalid_window(plugin):
    with pytest.raises(InvalidArgumentError):
        await plugin.rate_limit("alice", 1, 0)


async def test_per_identifier_isolation(plugin):
    assert not await plugin.rate_limit("alice", 1, 60)
    assert await plugin.rate_limit("alice", 1, 60)
    assert not await plugin.rate_limit("bob", 1, 60)


async def test_concurrent_checks_admit_limit(plugin):
    statuses = await asyncio.gather(
        *(plugin.rate_limit_with_status("burst", 5, 60) for _ in range(20))
    )
    admitted = [s for s in statuses if not s.should_block]
    assert len(admitted) == 5
    assert sorted(s.remaining_count for s in admitted) == [0, 1, 2, 3, 4]


async def test_clear_rate_limits(plugin, fake_redis):
    await plugin.rate_limit("alice", 1, 60)
    await plugin.rate_limit("bob", 1, 60)
    await plugin.cache_set("keep", {"v": 1})

    assert await plugin.clear_rate_limits() == 2
    assert not await plugin.rate_limit("alice", 1, 60)
    assert await plugin.cache_get("keep") == {"v": 1}


# ── boundary mode ────────────────────────────────────────────


@pytest.fixture
def boundary(plugin):
    return Throttle(plugin.client, block_at_limit=True)


async def test_boundary_mode_blocks_request_reaching_limit(boundary):
    first = await boundary.check_and_consume("alice", 3, 60)
    second = await boundary.check_and_consume("alice", 3, 60)
    third = await boundary.check_and_consume("alice", 3, 60)

    assert (first.should_block, first.remaining_count) == (False, 2)
    assert (second.should_block, second.remaining_count) == (False, 1)
    assert (third.should_block, third.remaining_count) == (True, 0)


async def test_boundary_mode_limit_one_admits_first(boundary):
    assert not (await boundary.check_and_consume("job", 1, 60)).should_block
    assert (await boundary.check_and_consume("job", 1, 60)).should_block


async def test_boundary_mode_from_params(params, fake_redis):
    params.rate_limit = RateLimitParams(block_at_limit=True)
    plugin = RedisPlugin(params)
    await plugin.initialize(fake_redis)

    assert plugin.throttle.block_at_limit
    await plugin.rate_limit("alice", 2, 60)
    assert await plugin.rate_limit("alice", 2, 60)
    await plugin.close()
