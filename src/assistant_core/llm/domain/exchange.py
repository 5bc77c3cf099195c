"""ModelRequest / ModelResponse value objects exchanged with the model client."""

from pydantic import BaseModel, Field

from assistant_core.llm.domain.message import Message, ToolCallRequest, ToolDefinition
from assistant_core.llm.domain.usage import TokenUsage


class ModelRequest(BaseModel, frozen=True):
    model: str = Field(min_length=1)
    messages: list[Message]
    tools: list[ToolDefinition] | None = None
    temperature: float | None = None
    max_output_tokens: int | None = None


class Choice(BaseModel, frozen=True):
    message: Message
    finish_reason: str | None = None


class ModelResponse(BaseModel, frozen=True):
    """Non-streaming completion returned by the model client."""

    id: str
    model: str
    choices: list[Choice]
    usage: TokenUsage = TokenUsage()


class ModelStreamChunk(BaseModel, frozen=True):
    """One incremental chunk of a streaming completion.

    usage is only present on the final chunk, when the provider reports it.
    """

    id: str
    model: str
    delta_content: str | None = None
    tool_calls: list[ToolCallRequest] = []
    finish_reason: str | None = None
    usage: TokenUsage | None = None
