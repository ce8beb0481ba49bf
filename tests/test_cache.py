"""Tests for the Cache facade."""

import pytest

from flow_redis import InvalidArgumentError


async def test_get_missing(plugin):
    assert await plugin.cache_get("nope") is None


@pytest.mark.parametrize(
    "value",
    [
        "text",
        42,
        3.5,
        True,
        [1, "two", None, {"three": 3}],
        {"user": {"id": "u1", "roles": ["admin", "dev"], "quota": {"daily": 10}}},
    ],
)
async def test_round_trip(plugin, value):
    await plugin.cache_set("k", value, 60)
    assert await plugin.cache_get("k") == value


async def test_set_with_ttl(plugin, fake_redis):
    await plugin.cache_set("k", {"v": 1}, 30)
    assert 0 < await fake_redis.ttl(plugin.cache.key("k")) <= 30


async def test_set_without_ttl_never_expires(plugin, fake_redis):
    await plugin.cache_set("k", {"v": 1})
    assert await fake_redis.ttl(plugin.cache.key("k")) == -1


async def test_expired_entry_is_missing(plugin, expire_now):
    await plugin.cache_set("k", "v", 60)
    await expire_now(plugin.cache.key("k"))
    assert await plugin.cache_get("k") is None


async def test_none_deletes(plugin):
    await plugin.cache_set("k", {"v": 1})
    await plugin.cache_set("k", None, 60)
    assert await plugin.cache_get("k") is None


async def test_delete(plugin):
    await plugin.cache_set("k", 1)
    await plugin.cache_delete("k")
    assert await plugin.cache_get("k") is None


async def test_delete_nonexistent(plugin):
    await plugin.cache_delete("nope")  # should not raise


async def test_overwrite(plugin):
    await plugin.cache_set("k", {"a": 1})
    await plugin.cache_set("k", {"a": 2})
    assert (await plugin.cache_get("k"))["a"] == 2


@pytest.mark.parametrize("ttl", [0, -5])
async def test_invalid_ttl(plugin, ttl):
    with pytest.raises(InvalidArgumentError):
        await plugin.cache_set("k", "v", ttl)


async def test_keys_live_under_namespace(plugin, fake_redis):
    await plugin.cache_set("k", "v")
    assert await fake_redis.get("_flow_redis_:cache:k") == '"v"'


# ── cache_function ───────────────────────────────────────────


async def test_cache_function_calls_once(plugin):
    calls = 0

    def compute():
        nonlocal calls
        calls += 1
        return {"answer": 42}

    first = await plugin.cache_function("answer", compute, 60)
    second = await plugin.cache_function("answer", compute, 60)

    assert first == second == {"answer": 42}
    assert calls == 1


async def test_cache_function_async(plugin):
    calls = 0

    async def compute():
        nonlocal calls
        calls += 1
        return ["a", "b"]

    assert await plugin.cache_function("letters", compute) == ["a", "b"]
    assert await plugin.cache_function("letters", compute) == ["a", "b"]
    assert calls == 1


async def test_cache_function_recomputes_after_expiry(plugin, expire_now):
    calls = 0

    def compute():
        nonlocal calls
        calls += 1
        return calls

    assert await plugin.cache_function("n", compute, 60) == 1
    await expire_now(plugin.cache.key("n"))
    assert await plugin.cache_function("n", compute, 60) == 2


async def test_cache_function_none_result_not_cached(plugin):
    calls = 0

    def compute():
        nonlocal calls
        calls += 1

    assert await plugin.cache_function("nothing", compute) is None
    assert await plugin.cache_function("nothing", compute) is None
    assert calls == 2


async def test_cache_function_error_propagates(plugin):
    def compute():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        await plugin.cache_function("broken", compute)
    assert await plugin.cache_get("broken") is None


# ── clear ────────────────────────────────────────────────────


async def test_clear_all(plugin):
    await plugin.cache_set("a", 1)
    await plugin.cache_set("b", 2)
    await plugin.rate_limit("alice", 5, 60)

    assert await plugin.clear_cache() == 2
    assert await plugin.cache_get("a") is None
    assert await plugin.cache_get("b") is None
    status = await plugin.rate_limit_with_status("alice", 5, 60)
    assert status.remaining_count == 3


async def test_clear_prefix(plugin):
    await plugin.cache_set("user:1", "x")
    await plugin.cache_set("user:2", "y")
    await plugin.cache_set("org:1", "z")

    assert await plugin.clear_cache("user:") == 2
    assert await plugin.cache_get("user:1") is None
    assert await plugin.cache_get("org:1") == "z"


async def test_clear_prefix_matches_literally(plugin):
    await plugin.cache_set("a*b", 1)
    await plugin.cache_set("axb", 2)

    assert await plugin.clear_cache("a*") == 1
    assert await plugin.cache_get("a*b") is None
    assert await plugin.cache_get("axb") == 2


async def test_clear_empty(plugin):
    assert await plugin.clear_cache() == 0
