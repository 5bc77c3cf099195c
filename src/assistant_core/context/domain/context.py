"""Layered AssistantContext and the AssistantResponse persisted after a request."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from assistant_core.llm.domain.message import Role


class MemorySnippet(BaseModel, frozen=True):
    content: str
    category: str | None = None
    importance: float = 0.0


class KnowledgeSnippet(BaseModel, frozen=True):
    title: str
    chunk: str


class HistoryMessage(BaseModel, frozen=True):
    role: Role
    content: str


class UserPreferences(BaseModel, frozen=True):
    response_length: str | None = None
    formality: str | None = None
    custom_instructions: str | None = None


class ToolSpec(BaseModel, frozen=True):
    """A tool available to the user, as described by the tool catalog."""

    name: str = Field(min_length=1)
    description: str
    input_schema: dict[str, Any] = {"type": "object", "properties": {}}


class AssistantContext(BaseModel, frozen=True):
    """Everything the context collaborator assembled for one request.

    Layers are listed from least to most request-specific.
    """

    core_instructions: str = ""
    system_prompt: str = ""
    user_preferences: UserPreferences = UserPreferences()
    memories: list[MemorySnippet] = []
    knowledge: list[KnowledgeSnippet] = []
    history: list[HistoryMessage] = []
    tools: list[ToolSpec] = []


class ToolCallSummary(BaseModel, frozen=True):
    """Public view of one tool invocation, without transport identifiers."""

    tool_name: str
    input: dict[str, Any]
    output: dict[str, Any]
    status: Literal["success", "failure"]
    duration_ms: int


class AssistantResponse(BaseModel, frozen=True):
    content: str
    model: str
    token_count: int
    tool_calls: list[ToolCallSummary] = []
