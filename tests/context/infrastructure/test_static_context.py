"""Tests for StaticContextService."""

import json
from pathlib import Path

from assistant_core.context.domain.actor import ai_actor
from assistant_core.context.domain.context import (
    AssistantContext,
    AssistantResponse,
    ToolCallSummary,
)
from assistant_core.context.infrastructure.static_context import StaticContextService
from assistant_core.core.errors import ErrorCode
from assistant_core.core.result import Failure, Success


def _make_response() -> AssistantResponse:
    return AssistantResponse(
        content="It is sunny.",
        model="m",
        token_count=42,
        tool_calls=[
            ToolCallSummary(
                tool_name="weather",
                input={"city": "Paris"},
                output={"sky": "clear"},
                status="success",
                duration_ms=5,
            )
        ],
    )


class TestBuildContext:
    async def test_returns_configured_context(self) -> None:
        context = AssistantContext(system_prompt="Be kind.")
        service = StaticContextService(context=context)

        result = await service.build_context(ai_actor("r1"), "chat-1", "hello")

        assert isinstance(result, Success)
        assert result.data == context


class TestPersistResponse:
    async def test_succeeds_without_transcript(self) -> None:
        service = StaticContextService(context=AssistantContext())

        result = await service.persist_response(ai_actor("r1"), "chat-1", _make_response())

        assert isinstance(result, Success)

    async def test_retains_no_state_between_requests(self, tmp_path: Path) -> None:
        transcript = tmp_path / "transcript.jsonl"
        service = StaticContextService(
            context=AssistantContext(), transcript_path=transcript
        )
        before = dict(vars(service))

        for i in range(50):
            await service.persist_response(ai_actor(f"r{i}"), "chat-1", _make_response())

        assert vars(service) == before
        assert len(transcript.read_text(encoding="utf-8").splitlines()) == 50

    async def test_appends_json_line_per_response(self, tmp_path: Path) -> None:
        transcript = tmp_path / "transcript.jsonl"
        service = StaticContextService(
            context=AssistantContext(), transcript_path=transcript
        )

        await service.persist_response(ai_actor("r1"), "chat-1", _make_response())
        await service.persist_response(ai_actor("r2"), "chat-2", _make_response())

        lines = transcript.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        first = json.loads(lines[0])
        assert first["chat_id"] == "chat-1"
        assert first["request_id"] == "r1"
        assert first["response"]["content"] == "It is sunny."
        assert first["response"]["tool_calls"][0]["tool_name"] == "weather"
        assert "persisted_at" in first

    async def test_unwritable_transcript_is_persistence_failure(
        self, tmp_path: Path
    ) -> None:
        transcript = tmp_path / "missing-dir" / "transcript.jsonl"
        service = StaticContextService(
            context=AssistantContext(), transcript_path=transcript
        )

        result = await service.persist_response(ai_actor("r1"), "chat-1", _make_response())

        assert isinstance(result, Failure)
        assert result.code == ErrorCode.PERSISTENCE_ERROR
        assert str(transcript) in result.message
