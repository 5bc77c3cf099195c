"""Tests for the StreamEvent discriminated union."""

from datetime import UTC

from assistant_core.orchestration.domain.events import (
    DoneEvent,
    ErrorEvent,
    MessageCompleteEvent,
    ToolCompleteEvent,
    stream_event_adapter,
)
from assistant_core.orchestration.domain.request import ResultUsage


class TestStreamEvents:
    def test_every_event_has_utc_timestamp(self) -> None:
        event = DoneEvent()

        assert event.type == "done"
        assert event.timestamp.tzinfo == UTC

    def test_adapter_selects_class_by_type(self) -> None:
        event = stream_event_adapter.validate_python(
            {"type": "error", "code": "LLM_ERROR", "message": "provider down"}
        )

        assert isinstance(event, ErrorEvent)
        assert event.code == "LLM_ERROR"

    def test_serialized_event_is_readable_by_clients(self) -> None:
        event = MessageCompleteEvent(
            message_id="msg-1",
            model="m",
            usage=ResultUsage(input_tokens=3, output_tokens=4),
        )

        restored = stream_event_adapter.validate_json(event.model_dump_json())

        assert restored == event

    def test_tool_complete_payload_shape(self) -> None:
        event = ToolCompleteEvent(
            tool_call_id="c1",
            tool_name="weather",
            output={"temp": 21},
            status="success",
            duration_ms=12,
        )

        dumped = event.model_dump(mode="json")

        assert dumped["type"] == "tool.complete"
        assert dumped["output"] == {"temp": 21}
        assert set(dumped) == {
            "type",
            "timestamp",
            "tool_call_id",
            "tool_name",
            "output",
            "status",
            "duration_ms",
        }
