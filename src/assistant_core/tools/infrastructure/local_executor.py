"""LocalToolExecutor — routes tool calls to in-process async handlers."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

from pydantic import ValidationError

from assistant_core.tools.domain.executor import ToolExecutionContext, ToolExecutionResult

ToolHandler: TypeAlias = Callable[
    [dict[str, Any], ToolExecutionContext], Awaitable[dict[str, Any]]
]


class LocalToolExecutor:
    """ToolExecutor backed by a name -> handler registry.

    Every tool-level fault (unknown tool, handler exception, timeout, output
    that is not a JSON object) is returned as a failed ToolExecutionResult.
    Satisfies the ToolExecutor protocol structurally.
    """

    def __init__(
        self,
        handlers: dict[str, ToolHandler] | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        self._handlers: dict[str, ToolHandler] = dict(handlers or {})
        self._timeout_ms = timeout_ms

    def register(self, name: str, handler: ToolHandler) -> None:
        self._handlers[name] = handler

    @property
    def tool_names(self) -> list[str]:
        return sorted(self._handlers)

    async def execute(
        self,
        tool_name: str,
        input: dict[str, Any],
        context: ToolExecutionContext,
    ) -> ToolExecutionResult:
        start = time.monotonic()
        handler = self._handlers.get(tool_name)
        if handler is None:
            return ToolExecutionResult(
                success=False,
                error_message=f"Unknown tool: {tool_name}",
                duration_ms=_elapsed_ms(start),
            )

        timeout = self._timeout_ms / 1000 if self._timeout_ms is not None else None
        try:
            async with asyncio.timeout(timeout):
                output = await handler(input, context)
        except TimeoutError:
            return ToolExecutionResult(
                success=False,
                error_message=f"Tool '{tool_name}' timed out after {self._timeout_ms} ms",
                duration_ms=_elapsed_ms(start),
            )
        except Exception as exc:
            return ToolExecutionResult(
                success=False,
                error_message=str(exc) or type(exc).__name__,
                duration_ms=_elapsed_ms(start),
            )

        try:
            return ToolExecutionResult(
                success=True, output=output, duration_ms=_elapsed_ms(start)
            )
        except ValidationError:
            return ToolExecutionResult(
                success=False,
                error_message=f"Tool '{tool_name}' returned non-object output",
                duration_ms=_elapsed_ms(start),
            )


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
