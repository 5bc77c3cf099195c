"""ToolExecutor Protocol and the value objects exchanged across the tool boundary."""

from typing import Any, Protocol

from pydantic import BaseModel, Field


class ToolExecutionContext(BaseModel, frozen=True):
    """Who and what a tool call is executed on behalf of."""

    user_id: str
    chat_id: str
    request_id: str


class ToolExecutionResult(BaseModel, frozen=True):
    """Outcome of one tool execution as reported by the executor."""

    success: bool
    output: dict[str, Any] = {}
    error_message: str | None = None
    duration_ms: int = Field(default=0, ge=0)


class ToolExecutor(Protocol):
    """Executes a named tool with structured input.

    Shared by concurrent orchestration requests; implementations must hold
    no per-request state.
    """

    async def execute(
        self,
        tool_name: str,
        input: dict[str, Any],
        context: ToolExecutionContext,
    ) -> ToolExecutionResult: ...
