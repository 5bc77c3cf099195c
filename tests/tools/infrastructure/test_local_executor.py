"""Tests for LocalToolExecutor handler routing and fault containment."""

import asyncio
from typing import Any

from assistant_core.tools.domain.executor import ToolExecutionContext
from assistant_core.tools.infrastructure.local_executor import LocalToolExecutor


def _make_context() -> ToolExecutionContext:
    return ToolExecutionContext(user_id="u1", chat_id="c1", request_id="r1")


async def _echo(input: dict[str, Any], context: ToolExecutionContext) -> dict[str, Any]:
    return {"echo": input, "user": context.user_id}


async def _explode(input: dict[str, Any], context: ToolExecutionContext) -> dict[str, Any]:
    raise ValueError("handler exploded")


async def _returns_list(input: dict[str, Any], context: ToolExecutionContext) -> Any:
    return ["a", "b"]


async def _sleepy(input: dict[str, Any], context: ToolExecutionContext) -> dict[str, Any]:
    await asyncio.sleep(1)
    return {}


class TestRouting:
    async def test_dispatches_to_registered_handler(self) -> None:
        executor = LocalToolExecutor(handlers={"echo": _echo})

        result = await executor.execute("echo", {"x": 1}, _make_context())

        assert result.success is True
        assert result.output == {"echo": {"x": 1}, "user": "u1"}
        assert result.error_message is None

    async def test_register_adds_handler(self) -> None:
        executor = LocalToolExecutor()
        executor.register("echo", _echo)

        result = await executor.execute("echo", {}, _make_context())

        assert result.success is True
        assert executor.tool_names == ["echo"]

    async def test_unknown_tool_is_a_failure_result(self) -> None:
        executor = LocalToolExecutor(handlers={"echo": _echo})

        result = await executor.execute("missing", {}, _make_context())

        assert result.success is False
        assert result.error_message == "Unknown tool: missing"

    async def test_constructor_copies_handler_mapping(self) -> None:
        handlers = {"echo": _echo}
        executor = LocalToolExecutor(handlers=handlers)
        handlers["other"] = _echo

        assert executor.tool_names == ["echo"]


class TestFaults:
    async def test_handler_exception_is_a_failure_result(self) -> None:
        executor = LocalToolExecutor(handlers={"boom": _explode})

        result = await executor.execute("boom", {}, _make_context())

        assert result.success is False
        assert result.error_message == "handler exploded"
        assert result.output == {}

    async def test_internal_timeout_is_a_failure_result(self) -> None:
        executor = LocalToolExecutor(handlers={"sleepy": _sleepy}, timeout_ms=20)

        result = await executor.execute("sleepy", {}, _make_context())

        assert result.success is False
        assert result.error_message == "Tool 'sleepy' timed out after 20 ms"
        assert result.duration_ms >= 0

    async def test_non_object_output_is_a_failure_result(self) -> None:
        executor = LocalToolExecutor(handlers={"listy": _returns_list})

        result = await executor.execute("listy", {}, _make_context())

        assert result.success is False
        assert result.error_message == "Tool 'listy' returned non-object output"
        assert result.output == {}
