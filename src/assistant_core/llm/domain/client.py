"""ModelClient Protocol — structural interface for chat-completion backends."""

from collections.abc import AsyncIterator
from typing import Protocol

from assistant_core.llm.domain.exchange import ModelRequest, ModelResponse, ModelStreamChunk


class ModelClient(Protocol):
    """Submits a transcript to a model.

    A single instance is shared by concurrent orchestration requests, so
    implementations must hold no per-request state.
    """

    async def complete(self, request: ModelRequest) -> ModelResponse: ...

    def stream(self, request: ModelRequest) -> AsyncIterator[ModelStreamChunk]: ...
