"""LiteLLMModelClient — ModelClient implementation using LiteLLM."""

import time
from collections.abc import AsyncIterator
from typing import Any

import litellm

from assistant_core.config.domain.llm import LlmConfig
from assistant_core.config.infrastructure.errors import ConfigValidationError
from assistant_core.llm.domain.exchange import (
    Choice,
    ModelRequest,
    ModelResponse,
    ModelStreamChunk,
)
from assistant_core.llm.domain.message import Message, ToolCallRequest
from assistant_core.llm.domain.observer import ModelObserver
from assistant_core.llm.domain.usage import TokenUsage
from assistant_core.llm.infrastructure.errors import ModelInvocationError


class LiteLLMModelClient:
    """Model client that delegates to any LiteLLM-supported backend.

    Model ids are passed through unchanged, so OpenRouter models are addressed
    as ``openrouter/<vendor>/<model>``. The instance holds only connection
    settings and is safe to share across concurrent requests.
    """

    def __init__(self, config: LlmConfig, observer: ModelObserver) -> None:
        if config.api_key is not None and config.api_key.strip() == "":
            raise ConfigValidationError("llm.api_key must not be empty")
        self._config = config
        self._observer = observer

    async def complete(self, request: ModelRequest) -> ModelResponse:
        """Send a non-streaming completion request.

        Raises:
            ModelInvocationError: if LiteLLM raises for any reason.
        """
        start = time.monotonic()
        try:
            raw = await litellm.acompletion(**self._build_kwargs(request), stream=False)
        except Exception as exc:
            reason = str(exc)
            self._observer.model_call_failed(model=request.model, reason=reason)
            raise ModelInvocationError(reason=reason) from exc

        response = _map_response(raw)
        self._observer.model_call_completed(
            model=request.model,
            duration_ms=int((time.monotonic() - start) * 1000),
            total_tokens=response.usage.total_tokens,
        )
        return response

    async def stream(self, request: ModelRequest) -> AsyncIterator[ModelStreamChunk]:
        """Send a streaming completion request and yield mapped chunks.

        Raises:
            ModelInvocationError: if LiteLLM raises while opening or reading the stream.
        """
        try:
            raw_stream = await litellm.acompletion(
                **self._build_kwargs(request),
                stream=True,
                stream_options={"include_usage": True},
            )
            async for raw_chunk in raw_stream:
                yield _map_chunk(raw_chunk)
        except Exception as exc:
            reason = str(exc)
            self._observer.model_call_failed(model=request.model, reason=reason)
            raise ModelInvocationError(reason=reason) from exc

    def _build_kwargs(self, request: ModelRequest) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": request.model,
            "messages": [_to_provider_message(m) for m in request.messages],
            "timeout": self._config.timeout_seconds,
        }
        if request.tools:
            kwargs["tools"] = [t.model_dump() for t in request.tools]
        if request.temperature is not None:
            kwargs["temperature"] = request.temperature
        if request.max_output_tokens:
            kwargs["max_tokens"] = request.max_output_tokens
        if self._config.api_base:
            kwargs["api_base"] = self._config.api_base
        if self._config.api_key:
            kwargs["api_key"] = self._config.api_key

        headers: dict[str, str] = {}
        if self._config.site_url:
            headers["HTTP-Referer"] = self._config.site_url
        if self._config.site_name:
            headers["X-Title"] = self._config.site_name
        if headers:
            kwargs["extra_headers"] = headers
        return kwargs


def _to_provider_message(message: Message) -> dict[str, Any]:
    """Convert a transcript Message to the OpenAI chat message dict format."""
    out: dict[str, Any] = {"role": message.role, "content": message.content}
    if message.role == "assistant" and message.tool_calls:
        out["tool_calls"] = [
            {
                "id": tc.id,
                "type": "function",
                "function": {"name": tc.name, "arguments": tc.arguments},
            }
            for tc in message.tool_calls
        ]
    if message.role == "tool":
        out["tool_call_id"] = message.tool_call_id or ""
    return out


def _map_tool_calls(raw_tool_calls: Any) -> list[ToolCallRequest]:
    if not raw_tool_calls:
        return []
    return [
        ToolCallRequest(
            id=tc.id or "",
            name=(tc.function.name if tc.function else None) or "",
            arguments=(tc.function.arguments if tc.function else None) or "",
        )
        for tc in raw_tool_calls
    ]


def _map_usage(raw_usage: Any) -> TokenUsage:
    if raw_usage is None:
        return TokenUsage()
    return TokenUsage(
        prompt_tokens=getattr(raw_usage, "prompt_tokens", 0) or 0,
        completion_tokens=getattr(raw_usage, "completion_tokens", 0) or 0,
        total_tokens=getattr(raw_usage, "total_tokens", 0) or 0,
    )


def _map_response(raw: Any) -> ModelResponse:
    """Map a LiteLLM ModelResponse to the domain ModelResponse."""
    choices: list[Choice] = []
    for raw_choice in raw.choices:
        tool_calls = _map_tool_calls(raw_choice.message.tool_calls)
        choices.append(
            Choice(
                message=Message(
                    role="assistant",
                    content=raw_choice.message.content or "",
                    tool_calls=tool_calls or None,
                ),
                finish_reason=raw_choice.finish_reason,
            )
        )
    return ModelResponse(
        id=raw.id or "",
        model=raw.model or "",
        choices=choices,
        usage=_map_usage(getattr(raw, "usage", None)),
    )


def _map_chunk(raw_chunk: Any) -> ModelStreamChunk:
    delta_content: str | None = None
    tool_calls: list[ToolCallRequest] = []
    finish_reason: str | None = None
    if raw_chunk.choices:
        raw_choice = raw_chunk.choices[0]
        delta = raw_choice.delta
        if delta is not None:
            delta_content = delta.content
            tool_calls = _map_tool_calls(delta.tool_calls)
        finish_reason = raw_choice.finish_reason

    raw_usage = getattr(raw_chunk, "usage", None)
    return ModelStreamChunk(
        id=raw_chunk.id or "",
        model=raw_chunk.model or "",
        delta_content=delta_content,
        tool_calls=tool_calls,
        finish_reason=finish_reason,
        usage=_map_usage(raw_usage) if raw_usage is not None else None,
    )
