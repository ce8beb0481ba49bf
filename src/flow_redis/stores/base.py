"""RecordStore protocol — keyed persistence for flow state and trace data."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from flow_redis.exceptions import InvalidArgumentError, MalformedRecordError

RecordT = TypeVar("RecordT", bound=BaseModel)


@dataclass(frozen=True)
class ListQuery:
    """Listing request.

    Attributes:
        limit:              Page size.  ``None`` or ``0`` returns the whole
                            collection in one response.
        continuation_token: Cursor returned by a previous page.  ``None``
                            starts from the beginning.
    """

    limit: int | None = None
    continuation_token: str | None = None


@dataclass(frozen=True)
class ListResult(Generic[RecordT]):
    """One page of records.  ``continuation_token`` is ``None`` on the last page."""

    records: list[RecordT] = field(default_factory=list)
    continuation_token: str | None = None


class RecordStore(ABC, Generic[RecordT]):
    """Abstract base for record stores.

    A store owns one *collection*: a map of record id to the record's JSON
    text.  Records are parsed with ``model`` on the way out; anything that
    fails to parse raises :class:`MalformedRecordError` instead of being
    skipped.
    """

    model: type[RecordT]

    @property
    @abstractmethod
    def collection(self) -> str:
        """Name identifying the collection (used in errors and logs)."""
        ...

    @abstractmethod
    async def load(self, record_id: str) -> RecordT | None:
        """Return the stored record, or ``None`` if not found."""
        ...

    @abstractmethod
    async def save(self, record_id: str, record: RecordT) -> None:
        """Create or overwrite a record.  Last writer wins."""
        ...

    @abstractmethod
    async def list(self, query: ListQuery | None = None) -> ListResult[RecordT]:
        """Return one page of records (or all of them when no limit is set)."""
        ...

    @abstractmethod
    async def clear(self) -> int:
        """Delete this collection only.  Returns how many keys (Redis) or records (memory) were removed."""
        ...

    # ── helpers ──────────────────────────────────────────────

    def _parse(self, record_id: str, raw: str) -> RecordT:
        try:
            return self.model.model_validate_json(raw)
        except ValidationError as exc:
            raise MalformedRecordError(self.collection, record_id, str(exc)) from exc

    def _dump(self, record: RecordT) -> str:
        return record.model_dump_json(by_alias=True)

    @staticmethod
    def _limit(query: ListQuery | None) -> int:
        limit = (query.limit if query else None) or 0
        if limit < 0:
            raise InvalidArgumentError("list", "limit must not be negative")
        return limit
