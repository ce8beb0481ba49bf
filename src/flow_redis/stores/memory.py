"""InMemoryRecordStore — zero-config, dict-backed record store for development and testing."""

from __future__ import annotations

from flow_redis.exceptions import InvalidArgumentError
from flow_redis.stores.base import ListQuery, ListResult, RecordStore, RecordT


class InMemoryRecordStore(RecordStore[RecordT]):
    """In-memory store keeping each record's JSON text.  Data is lost on process exit.

    Records are serialised exactly as the Redis store does, so parse
    failures surface the same way.  Continuation tokens are offsets into
    the sorted record ids.
    """

    def __init__(self, model: type[RecordT], name: str = "memory") -> None:
        self.model = model
        self._name = name
        self._data: dict[str, str] = {}

    @property
    def collection(self) -> str:
        return self._name

    async def load(self, record_id: str) -> RecordT | None:
        raw = self._data.get(record_id)
        if raw is None:
            return None
        return self._parse(record_id, raw)

    async def save(self, record_id: str, record: RecordT) -> None:
        self._data[record_id] = self._dump(record)

    async def list(self, query: ListQuery | None = None) -> ListResult[RecordT]:
        limit = self._limit(query)
        ids = sorted(self._data)
        cursor = (query.continuation_token if query else None) or "0"
        try:
            start = int(cursor)
        except ValueError as exc:
            raise InvalidArgumentError("list", f"invalid continuation token {cursor!r}") from exc
        end = start + limit if limit else len(ids)

        records = [self._parse(rid, self._data[rid]) for rid in ids[start:end]]
        token = str(end) if limit and end < len(ids) else None
        return ListResult(records=records, continuation_token=token)

    async def clear(self) -> int:
        count = len(self._data)
        self._data.clear()
        return count
