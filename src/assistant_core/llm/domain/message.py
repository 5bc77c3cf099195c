"""Transcript value objects — messages, tool-call requests and tool definitions."""

from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, Field

Role: TypeAlias = Literal["system", "user", "assistant", "tool"]


class ToolCallRequest(BaseModel, frozen=True):
    """One tool invocation requested by the model.

    arguments is the raw JSON string exactly as emitted by the model; it is
    parsed by the tool loop, never here.
    """

    id: str
    name: str
    arguments: str


class Message(BaseModel, frozen=True):
    """One entry of the transcript submitted to the model."""

    role: Role
    content: str
    tool_call_id: str | None = None
    tool_calls: list[ToolCallRequest] | None = None


class FunctionDefinition(BaseModel, frozen=True):
    name: str = Field(min_length=1)
    description: str
    parameters: dict[str, Any]


class ToolDefinition(BaseModel, frozen=True):
    """A tool in the model-compatible function-calling schema."""

    type: Literal["function"] = "function"
    function: FunctionDefinition
