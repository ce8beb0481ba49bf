"""
flow_redis — Hello World

One Redis connection, three primitives: a JSON cache, a fixed-window
rate limiter, and paginated stores for flow state and traces.

Needs a Redis server (``$REDIS_URL`` or ``redis://localhost:6379``).
"""

import asyncio

from flow_redis import RedisPlugin, RedisPluginParams, StoreParams
from flow_redis.stores import FlowState, ListQuery
from flow_redis.stores.models import FlowOperation

# ─── Your functions (anything — completely decoupled from the plugin) ───


def expensive_lookup() -> dict:
    print("  (computing...)")
    return {"answer": 42, "sources": ["doc_arch", "doc_api"]}


async def main():
    # ──────────────────────────────────────
    #  1. Configure and connect
    # ──────────────────────────────────────
    params = RedisPluginParams(
        flow_state_store=StoreParams(storage_key="flowState"),
        trace_store=StoreParams(storage_key="trace"),
    )

    async with RedisPlugin(params) as plugin:
        # ──────────────────────────────────────
        #  2. Rate limit: 1 request per minute
        # ──────────────────────────────────────
        print("=== Rate limit ===\n")

        for i in range(3):
            if await plugin.rate_limit("expensiveFlow", 1, 60):
                print(f"  Request #{i + 1}: rate limited")
            else:
                print(f"  Request #{i + 1}: allowed")

        status = await plugin.rate_limit_with_status("expensiveFlow", 1, 60)
        print(f"  Resets in {status.resets_in_seconds}s")
        await plugin.reset_rate_limit("expensiveFlow")

        # ──────────────────────────────────────
        #  3. Read-through cache
        # ──────────────────────────────────────
        print("\n=== Cache ===\n")

        for _ in range(2):
            value = await plugin.cache_function("lookup", expensive_lookup, ttl_seconds=30)
            print(f"  Value: {value}")

        # ──────────────────────────────────────
        #  4. Flow state store
        # ──────────────────────────────────────
        print("\n=== Flow states ===\n")

        for i in range(5):
            state = FlowState(
                flow_id=f"flow-{i}",
                start_time=float(i),
                operation=FlowOperation(name=f"flows/flow-{i}"),
            )
            await plugin.flow_state_store.save(state.flow_id, state)

        token = None
        while True:
            page = await plugin.flow_state_store.list(ListQuery(limit=2, continuation_token=token))
            print(f"  Page: {[s.flow_id for s in page.records]}")
            token = page.continuation_token
            if token is None:
                break

        # ──────────────────────────────────────
        #  5. Clean up
        # ──────────────────────────────────────
        print("\n=== Clean up ===\n")

        print(f"  Flow keys removed:  {await plugin.clear_flow_store()}")
        print(f"  Cache keys removed: {await plugin.clear_cache()}")


if __name__ == "__main__":
    asyncio.run(main())
