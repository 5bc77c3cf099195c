"""ToolLoop — bounded model / tool-call execution engine."""

import asyncio
import json
import time
import uuid
from collections.abc import Awaitable, Callable
from typing import TypeAlias

from assistant_core.llm.domain.client import ModelClient
from assistant_core.llm.domain.exchange import ModelRequest
from assistant_core.llm.domain.message import Message, ToolCallRequest
from assistant_core.llm.domain.usage import TokenUsage
from assistant_core.loop.domain.arguments import ArgumentParseError, parse_arguments
from assistant_core.loop.domain.config import LoopConfig
from assistant_core.loop.domain.errors import LoopCancelledError, ModelResponseError
from assistant_core.loop.domain.observer import LoopObserver
from assistant_core.loop.domain.result import (
    DEGRADATION_MESSAGE,
    LoopInput,
    LoopResult,
    StoppedReason,
    ToolCallRecord,
)
from assistant_core.tools.domain.executor import (
    ToolExecutionContext,
    ToolExecutionResult,
    ToolExecutor,
)

ToolBatchListener: TypeAlias = Callable[[list[ToolCallRecord]], Awaitable[None]]


class ToolLoop:
    """Drives the model through rounds of tool calls until it answers.

    One instance serves exactly one request: the transcript, counters and
    usage live in run()'s frame and are never shared. Model calls are issued
    one at a time; each batch of requested tool calls is fanned out
    concurrently and fully fanned in before the next model call.

    Recoverable conditions never raise. Tool faults (bad arguments, handler
    errors, timeouts) become failure records fed back to the model, and
    safety limits end the run with a degraded LoopResult. Only faults of the
    model client itself propagate, plus LoopCancelledError once cancel_event
    is set.
    """

    def __init__(
        self,
        model_client: ModelClient,
        tool_executor: ToolExecutor,
        config: LoopConfig,
        observer: LoopObserver,
        cancel_event: asyncio.Event | None = None,
        on_tool_batch: ToolBatchListener | None = None,
    ) -> None:
        self._model_client = model_client
        self._tool_executor = tool_executor
        self._config = config
        self._observer = observer
        self._cancel_event = cancel_event
        self._on_tool_batch = on_tool_batch

    async def run(self, loop_input: LoopInput) -> LoopResult:
        """Run the loop to completion or to a safety limit.

        Raises:
            ModelResponseError: if the model returns no choices.
            LoopCancelledError: if cancellation was requested; checked before
                every model call and before every tool batch.
            Exception: anything raised by the model client, unchanged.
        """
        transcript = list(loop_input.messages)
        context = loop_input.context or ToolExecutionContext(
            user_id="unknown",
            chat_id="unknown",
            request_id=f"req-{uuid.uuid4()}",
        )
        request_id = context.request_id
        iterations = 0
        total_tool_calls = 0
        records: list[ToolCallRecord] = []
        usage = TokenUsage()
        stopped_reason = StoppedReason.MAX_ITERATIONS

        while iterations < self._config.max_iterations:
            self._raise_if_cancelled(request_id=request_id, iterations=iterations)

            if total_tool_calls >= self._config.max_tool_calls:
                stopped_reason = StoppedReason.MAX_TOOL_CALLS
                break

            iterations += 1
            self._observer.loop_iteration_started(
                request_id=request_id, iteration=iterations
            )

            response = await self._model_client.complete(
                ModelRequest(
                    model=loop_input.model,
                    messages=list(transcript),
                    tools=loop_input.tools or None,
                    temperature=loop_input.temperature,
                    max_output_tokens=loop_input.max_tokens,
                )
            )
            usage = usage.plus(response.usage)

            if not response.choices:
                raise ModelResponseError("model returned no choices")
            assistant_message = response.choices[0].message
            requested = assistant_message.tool_calls or []

            if not requested:
                self._observer.loop_completed(
                    request_id=request_id,
                    iterations=iterations,
                    total_tool_calls=total_tool_calls,
                )
                return LoopResult(
                    content=assistant_message.content,
                    model=response.model,
                    iterations=iterations,
                    tool_calls=records,
                    usage=usage,
                )

            # Partial batches are never admitted.
            if total_tool_calls + len(requested) > self._config.max_tool_calls:
                stopped_reason = StoppedReason.MAX_TOOL_CALLS
                break

            transcript.append(
                Message(
                    role="assistant",
                    content=assistant_message.content,
                    tool_calls=requested,
                )
            )

            self._raise_if_cancelled(request_id=request_id, iterations=iterations)
            batch = await self._execute_batch(requested=requested, context=context)

            for record in batch:
                records.append(record)
                transcript.append(
                    Message(
                        role="tool",
                        content=_tool_message_content(record),
                        tool_call_id=record.tool_call_id,
                    )
                )
            total_tool_calls += len(batch)

            if self._on_tool_batch is not None:
                await self._on_tool_batch(batch)

        self._observer.loop_stopped(
            request_id=request_id,
            reason=stopped_reason,
            iterations=iterations,
            total_tool_calls=total_tool_calls,
        )
        return LoopResult(
            content=DEGRADATION_MESSAGE,
            model=loop_input.model,
            iterations=iterations,
            tool_calls=records,
            stopped_reason=stopped_reason,
            usage=usage,
        )

    async def _execute_batch(
        self, requested: list[ToolCallRequest], context: ToolExecutionContext
    ) -> list[ToolCallRecord]:
        """Fan out every call in the batch and return their records in request order.

        _execute_call never raises for tool-level faults, so one sibling's
        failure cannot cancel the rest of the group.
        """
        async with asyncio.TaskGroup() as tg:
            tasks = [
                tg.create_task(self._execute_call(request=request, context=context))
                for request in requested
            ]
        return [task.result() for task in tasks]

    async def _execute_call(
        self, request: ToolCallRequest, context: ToolExecutionContext
    ) -> ToolCallRecord:
        parsed = parse_arguments(request.arguments)
        if isinstance(parsed, ArgumentParseError):
            record = ToolCallRecord(
                tool_call_id=request.id,
                tool_name=request.name,
                input={},
                output={},
                status="failure",
                error_message=parsed.reason,
                duration_ms=0,
            )
        else:
            result = await self._invoke(
                tool_name=request.name, tool_input=parsed.value, context=context
            )
            record = ToolCallRecord(
                tool_call_id=request.id,
                tool_name=request.name,
                input=parsed.value,
                output=result.output,
                status="success" if result.success else "failure",
                error_message=result.error_message,
                duration_ms=result.duration_ms,
            )

        self._observer.loop_tool_call_completed(
            request_id=context.request_id,
            tool_call_id=record.tool_call_id,
            tool_name=record.tool_name,
            status=record.status,
            duration_ms=record.duration_ms,
            error_message=record.error_message,
        )
        return record

    async def _invoke(
        self,
        tool_name: str,
        tool_input: dict[str, object],
        context: ToolExecutionContext,
    ) -> ToolExecutionResult:
        timeout_ms = self._config.tool_call_timeout_ms
        start = time.monotonic()
        try:
            async with asyncio.timeout(timeout_ms / 1000):
                return await self._tool_executor.execute(tool_name, tool_input, context)
        except TimeoutError:
            return ToolExecutionResult(
                success=False,
                error_message=f"Tool '{tool_name}' timed out after {timeout_ms} ms",
                duration_ms=_elapsed_ms(start),
            )
        except Exception as exc:
            return ToolExecutionResult(
                success=False,
                error_message=str(exc) or type(exc).__name__,
                duration_ms=_elapsed_ms(start),
            )

    def _raise_if_cancelled(self, request_id: str, iterations: int) -> None:
        if self._cancel_event is not None and self._cancel_event.is_set():
            self._observer.loop_cancelled(request_id=request_id, iterations=iterations)
            raise LoopCancelledError(iterations=iterations)


def _tool_message_content(record: ToolCallRecord) -> str:
    if record.status == "success":
        return json.dumps(record.output, default=str)
    return json.dumps({"error": record.error_message or "Tool execution failed"})


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
