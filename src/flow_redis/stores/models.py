"""Pydantic models for the records kept in the stores.

Field names are snake_case in Python and camelCase on the wire.  Unknown
fields are kept, so records written by a newer host survive a round trip.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class FlowOperation(_Record):
    """Long-running operation tracking a flow's progress."""

    name: str
    done: bool = False
    result: dict[str, Any] | None = None
    metadata: Any = None


class BlockedOnStep(_Record):
    name: str


class FlowExecution(_Record):
    start_time: float
    trace_ids: list[str] = Field(default_factory=list)


class FlowState(_Record):
    """Durable state of one flow run."""

    flow_id: str
    start_time: float
    operation: FlowOperation
    name: str | None = None
    input: Any = None
    cache: dict[str, Any] = Field(default_factory=dict)
    events_triggered: dict[str, Any] = Field(default_factory=dict)
    blocked_on_step: BlockedOnStep | None = None
    trace_context: str | None = None
    executions: list[FlowExecution] = Field(default_factory=list)


class SpanData(_Record):
    span_id: str
    trace_id: str
    start_time: float
    end_time: float
    parent_span_id: str | None = None
    display_name: str = ""
    attributes: dict[str, Any] = Field(default_factory=dict)


class TraceData(_Record):
    """All spans recorded for one trace."""

    trace_id: str
    display_name: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    spans: dict[str, SpanData] = Field(default_factory=dict)
