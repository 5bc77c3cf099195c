"""FakeToolExecutor — in-memory ToolExecutor with scripted behaviour per tool."""

import asyncio
from dataclasses import dataclass
from typing import Any

from assistant_core.tools.domain.executor import ToolExecutionContext, ToolExecutionResult


@dataclass(frozen=True)
class ExecutedCall:
    tool_name: str
    input: dict[str, Any]
    context: ToolExecutionContext


class FakeToolExecutor:
    """Satisfies the ToolExecutor protocol.

    - outputs: tool name -> output returned on success (default {"ok": True}).
    - failures: tool name -> error message returned as a failed result.
    - raises: tool name -> exception raised from execute().
    - delays: tool name -> seconds to sleep before answering.

    Tracks how many executions are in flight at once in `max_in_flight`.
    """

    def __init__(
        self,
        outputs: dict[str, dict[str, Any]] | None = None,
        failures: dict[str, str] | None = None,
        raises: dict[str, Exception] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self._outputs = outputs or {}
        self._failures = failures or {}
        self._raises = raises or {}
        self._delays = delays or {}
        self.calls: list[ExecutedCall] = []
        self.completed: list[str] = []
        self._in_flight = 0
        self.max_in_flight = 0

    async def execute(
        self,
        tool_name: str,
        input: dict[str, Any],
        context: ToolExecutionContext,
    ) -> ToolExecutionResult:
        self.calls.append(ExecutedCall(tool_name=tool_name, input=input, context=context))
        self._in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self._in_flight)
        try:
            delay = self._delays.get(tool_name, 0.0)
            if delay:
                await asyncio.sleep(delay)
            if tool_name in self._raises:
                raise self._raises[tool_name]
            self.completed.append(tool_name)
            if tool_name in self._failures:
                return ToolExecutionResult(
                    success=False, error_message=self._failures[tool_name], duration_ms=1
                )
            return ToolExecutionResult(
                success=True,
                output=self._outputs.get(tool_name, {"ok": True}),
                duration_ms=1,
            )
        finally:
            self._in_flight -= 1
