"""StreamEvent models — orchestration lifecycle events emitted by stream()."""

from datetime import UTC, datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

from assistant_core.orchestration.domain.request import ResultUsage


def _now() -> datetime:
    return datetime.now(UTC)


class BaseStreamEvent(BaseModel, frozen=True):
    timestamp: datetime = Field(default_factory=_now)


class MessageStartEvent(BaseStreamEvent, frozen=True):
    type: Literal["message.start"] = "message.start"
    message_id: str


class MessageDeltaEvent(BaseStreamEvent, frozen=True):
    type: Literal["message.delta"] = "message.delta"
    content: str


class MessageCompleteEvent(BaseStreamEvent, frozen=True):
    type: Literal["message.complete"] = "message.complete"
    message_id: str
    model: str
    usage: ResultUsage


class ToolStartEvent(BaseStreamEvent, frozen=True):
    type: Literal["tool.start"] = "tool.start"
    tool_call_id: str
    tool_name: str
    input: dict[str, Any]


class ToolCompleteEvent(BaseStreamEvent, frozen=True):
    type: Literal["tool.complete"] = "tool.complete"
    tool_call_id: str
    tool_name: str
    output: dict[str, Any]
    status: Literal["success", "failure"]
    duration_ms: int


class ErrorEvent(BaseStreamEvent, frozen=True):
    type: Literal["error"] = "error"
    code: str
    message: str


class DoneEvent(BaseStreamEvent, frozen=True):
    type: Literal["done"] = "done"


StreamEvent = Annotated[
    MessageStartEvent
    | MessageDeltaEvent
    | MessageCompleteEvent
    | ToolStartEvent
    | ToolCompleteEvent
    | ErrorEvent
    | DoneEvent,
    Field(discriminator="type"),
]

stream_event_adapter: TypeAdapter[StreamEvent] = TypeAdapter(StreamEvent)
