"""ToolCallRecord, LoopInput and LoopResult value objects."""

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel

from assistant_core.llm.domain.message import Message, ToolDefinition
from assistant_core.llm.domain.usage import TokenUsage
from assistant_core.tools.domain.executor import ToolExecutionContext

DEGRADATION_MESSAGE = (
    "I apologize, but I was unable to complete the task within the allowed limits. "
    "Please try breaking down your request into smaller parts."
)


class StoppedReason(StrEnum):
    """Why a loop ended without a natural model answer."""

    MAX_ITERATIONS = "max_iterations"
    MAX_TOOL_CALLS = "max_tool_calls"


class ToolCallRecord(BaseModel, frozen=True):
    """Audit record of one tool invocation, successful or not."""

    tool_call_id: str
    tool_name: str
    input: dict[str, Any]
    output: dict[str, Any]
    status: Literal["success", "failure"]
    error_message: str | None = None
    duration_ms: int


class LoopInput(BaseModel, frozen=True):
    messages: list[Message]
    model: str
    tools: list[ToolDefinition] | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    context: ToolExecutionContext | None = None


class LoopResult(BaseModel, frozen=True):
    """Outcome of a loop run.

    stopped_reason is None only when the model produced a final answer;
    otherwise content is DEGRADATION_MESSAGE and all partial progress
    (usage, tool_calls) is preserved.
    """

    content: str
    model: str
    iterations: int
    tool_calls: list[ToolCallRecord]
    stopped_reason: StoppedReason | None = None
    usage: TokenUsage
