"""Redis-backed record stores over a single hash per collection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flow_redis.config import StoreParams
from flow_redis.stores.base import ListQuery, ListResult, RecordStore, RecordT
from flow_redis.stores.models import FlowState, TraceData

if TYPE_CHECKING:
    from flow_redis.client import StoreClient

logger = logging.getLogger(__name__)

_START = "0"


class RedisRecordStore(RecordStore[RecordT]):
    """Keeps every record of a collection as one field of a Redis hash.

    The hash lives at ``<prefix>:<category>:<storage_key>``.  Loads and
    saves are single ``HGET`` / ``HSET`` calls; listing is a server-side
    ``HSCAN`` script that either returns one bounded page or walks the
    whole hash.

    Parameters:
        client:      Shared store client.
        category:    Key category, e.g. ``"flow_storage"``.
        storage_key: Hash name within the category.
        model:       Pydantic model every record is parsed with.
    """

    def __init__(
        self,
        client: StoreClient,
        *,
        category: str,
        storage_key: str,
        model: type[RecordT],
    ) -> None:
        self._client = client
        self.category = category
        self.storage_key = storage_key
        self.model = model

    @property
    def collection(self) -> str:
        return f"{self.category}:{self.storage_key}"

    @property
    def key(self) -> str:
        return self._client.key(self.category, self.storage_key)

    async def load(self, record_id: str) -> RecordT | None:
        raw = await self._client.redis.hget(self.key, record_id)
        if raw is None:
            return None
        return self._parse(record_id, raw)

    async def save(self, record_id: str, record: RecordT) -> None:
        await self._client.redis.hset(self.key, record_id, self._dump(record))

    async def list(self, query: ListQuery | None = None) -> ListResult[RecordT]:
        limit = self._limit(query)
        cursor = (query.continuation_token if query else None) or _START

        entries, next_cursor = await self._client.run_script(
            "storage_list",
            keys=[self.key],
            args=[limit, cursor, self._client.params.list_page_size],
        )
        pairs = zip(entries[::2], entries[1::2])
        records = [self._parse(record_id, raw) for record_id, raw in pairs]

        token = None
        if limit and str(next_cursor) != _START:
            token = str(next_cursor)
        logger.debug("Listed %d records from %s (next=%s)", len(records), self.collection, token)
        return ListResult(records=records, continuation_token=token)

    async def clear(self) -> int:
        return await self._client.redis.unlink(self.key)


class FlowStateStore(RedisRecordStore[FlowState]):
    """Flow state records under ``flow_storage:<storage_key|states>``."""

    CATEGORY = "flow_storage"
    DEFAULT_STORAGE_KEY = "states"

    def __init__(self, client: StoreClient, params: StoreParams | None = None) -> None:
        params = params or StoreParams()
        super().__init__(
            client,
            category=self.CATEGORY,
            storage_key=params.storage_key or self.DEFAULT_STORAGE_KEY,
            model=FlowState,
        )


class TraceStore(RedisRecordStore[TraceData]):
    """Trace records under ``trace_storage:<storage_key|traces>``."""

    CATEGORY = "trace_storage"
    DEFAULT_STORAGE_KEY = "traces"

    def __init__(self, client: StoreClient, params: StoreParams | None = None) -> None:
        params = params or StoreParams()
        super().__init__(
            client,
            category=self.CATEGORY,
            storage_key=params.storage_key or self.DEFAULT_STORAGE_KEY,
            model=TraceData,
        )
