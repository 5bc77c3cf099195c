"""Orchestrator — context, prompt, tool loop and persistence behind run() and stream()."""

import asyncio
import uuid
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from typing import TypeAlias

from pydantic import ValidationError

from assistant_core.context.domain.actor import ActorContext, ai_actor
from assistant_core.context.domain.context import AssistantResponse, ToolCallSummary
from assistant_core.context.domain.service import ContextService
from assistant_core.core.errors import AssistantCoreError, ErrorCode
from assistant_core.core.result import Failure, Result, failure, success
from assistant_core.llm.domain.client import ModelClient
from assistant_core.loop.application.tool_loop import ToolBatchListener, ToolLoop
from assistant_core.loop.domain.errors import LoopCancelledError
from assistant_core.loop.domain.observer import LoopObserver
from assistant_core.loop.domain.result import LoopInput, LoopResult, ToolCallRecord
from assistant_core.orchestration.domain.config import OrchestratorConfig
from assistant_core.orchestration.domain.events import (
    DoneEvent,
    ErrorEvent,
    MessageCompleteEvent,
    MessageDeltaEvent,
    MessageStartEvent,
    StreamEvent,
    ToolCompleteEvent,
    ToolStartEvent,
)
from assistant_core.orchestration.domain.observer import OrchestratorObserver
from assistant_core.orchestration.domain.request import (
    OrchestratorInput,
    OrchestratorResult,
    ResultUsage,
)
from assistant_core.prompt.domain.builder import PromptBuilder, PromptInput
from assistant_core.tools.domain.executor import ToolExecutionContext, ToolExecutor

Emit: TypeAlias = Callable[[StreamEvent], None]


@dataclass(frozen=True)
class _PreparedRequest:
    """Everything resolved before the first model call of a request."""

    config: OrchestratorConfig
    actor: ActorContext
    loop_input: LoopInput


class Orchestrator:
    """Runs one user message through context assembly, prompting and the tool loop.

    The orchestrator holds only collaborators and the baseline config; every
    request gets its own merged config snapshot, actor and ToolLoop, so
    concurrent requests share no mutable state.
    """

    def __init__(
        self,
        model_client: ModelClient,
        tool_executor: ToolExecutor,
        context_service: ContextService,
        config: OrchestratorConfig,
        observer: OrchestratorObserver,
        loop_observer: LoopObserver,
    ) -> None:
        self._model_client = model_client
        self._tool_executor = tool_executor
        self._context_service = context_service
        self._config = config
        self._observer = observer
        self._loop_observer = loop_observer
        self._prompt_builder = PromptBuilder()
        # Strong references to running stream supervisors.
        self._supervisors: set[asyncio.Task[None]] = set()

    async def run(self, request: OrchestratorInput) -> Result[OrchestratorResult]:
        """Process a request to completion and return the aggregate result.

        Validation and context failures short-circuit before any model call.
        Model-client faults become an LLM_ERROR failure. Persisting the
        response is best-effort and never turns a success into a failure.
        """
        request_id = f"orch-{uuid.uuid4()}"
        prepared = await self._prepare(request=request, request_id=request_id, mode="run")
        if isinstance(prepared, Failure):
            return prepared

        loop = self._new_loop(config=prepared.config)
        try:
            loop_result = await loop.run(prepared.loop_input)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            self._observer.model_failed(request_id=request_id, reason=reason)
            return failure(ErrorCode.LLM_ERROR, reason)

        self._report_completed(request_id=request_id, loop_result=loop_result)
        await self._persist(
            actor=prepared.actor, chat_id=request.chat_id, loop_result=loop_result
        )
        return success(_to_orchestrator_result(loop_result))

    async def stream(self, request: OrchestratorInput) -> AsyncIterator[StreamEvent]:
        """Process a request and yield lifecycle events as they happen.

        A supervisor task runs the pipeline and writes events to a queue that
        this generator drains. The stream always opens with message.start
        and closes with exactly one done; every failure is reported as an
        error event just before done. If the consumer stops iterating early,
        the supervisor is told to stop at its next iteration or batch
        boundary and is left to wind down on its own.
        """
        request_id = f"orch-stream-{uuid.uuid4()}"
        queue: asyncio.Queue[StreamEvent | None] = asyncio.Queue()
        cancel_event = asyncio.Event()

        supervisor = asyncio.create_task(
            self._supervise_stream(
                request=request,
                request_id=request_id,
                emit=queue.put_nowait,
                close=lambda: queue.put_nowait(None),
                cancel_event=cancel_event,
            )
        )
        self._supervisors.add(supervisor)
        supervisor.add_done_callback(self._supervisors.discard)

        finished = False
        try:
            while (event := await queue.get()) is not None:
                if isinstance(event, DoneEvent):
                    finished = True
                yield event
        finally:
            if not finished:
                cancel_event.set()
                self._observer.stream_abandoned(request_id=request_id)

    async def _supervise_stream(
        self,
        request: OrchestratorInput,
        request_id: str,
        emit: Emit,
        close: Callable[[], None],
        cancel_event: asyncio.Event,
    ) -> None:
        message_id = f"msg-{uuid.uuid4()}"
        emit(MessageStartEvent(message_id=message_id))
        try:
            await self._stream_pipeline(
                request=request,
                request_id=request_id,
                message_id=message_id,
                emit=emit,
                cancel_event=cancel_event,
            )
        except LoopCancelledError:
            pass
        except Exception as exc:
            code = exc.code if isinstance(exc, AssistantCoreError) else ErrorCode.INTERNAL_ERROR
            emit(ErrorEvent(code=code, message=str(exc) or type(exc).__name__))
        finally:
            emit(DoneEvent())
            close()

    async def _stream_pipeline(
        self,
        request: OrchestratorInput,
        request_id: str,
        message_id: str,
        emit: Emit,
        cancel_event: asyncio.Event,
    ) -> None:
        prepared = await self._prepare(
            request=request, request_id=request_id, mode="stream"
        )
        if isinstance(prepared, Failure):
            emit(ErrorEvent(code=prepared.code, message=prepared.message))
            return

        async def on_tool_batch(records: list[ToolCallRecord]) -> None:
            for record in records:
                emit(
                    ToolStartEvent(
                        tool_call_id=record.tool_call_id,
                        tool_name=record.tool_name,
                        input=record.input,
                    )
                )
                emit(
                    ToolCompleteEvent(
                        tool_call_id=record.tool_call_id,
                        tool_name=record.tool_name,
                        output=record.output,
                        status=record.status,
                        duration_ms=record.duration_ms,
                    )
                )

        loop = self._new_loop(
            config=prepared.config,
            cancel_event=cancel_event,
            on_tool_batch=on_tool_batch,
        )
        try:
            loop_result = await loop.run(prepared.loop_input)
        except LoopCancelledError:
            raise
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            self._observer.model_failed(request_id=request_id, reason=reason)
            emit(ErrorEvent(code=ErrorCode.LLM_ERROR, message=reason))
            return

        # The model is called in blocking form, so the whole answer is one delta.
        emit(MessageDeltaEvent(content=loop_result.content))
        emit(
            MessageCompleteEvent(
                message_id=message_id,
                model=loop_result.model,
                usage=_to_result_usage(loop_result),
            )
        )
        self._report_completed(request_id=request_id, loop_result=loop_result)
        await self._persist(
            actor=prepared.actor, chat_id=request.chat_id, loop_result=loop_result
        )

    async def _prepare(
        self, request: OrchestratorInput, request_id: str, mode: str
    ) -> _PreparedRequest | Failure:
        """Validate the request, snapshot its config, build context and prompt."""
        invalid = _validate(request)
        if invalid is not None:
            self._observer.request_rejected(request_id=request_id, reason=invalid)
            return failure(ErrorCode.VALIDATION_ERROR, invalid)

        try:
            config = self._config.merged(request.config_overrides)
        except ValidationError as exc:
            reason = f"invalid config overrides: {exc}"
            self._observer.request_rejected(request_id=request_id, reason=reason)
            return failure(ErrorCode.VALIDATION_ERROR, reason)

        self._observer.request_started(
            request_id=request_id, chat_id=request.chat_id, model=config.model, mode=mode
        )

        actor = ai_actor(request_id)
        try:
            context_result = await self._context_service.build_context(
                actor, request.chat_id, request.user_message
            )
        except Exception as exc:
            context_result = failure(
                ErrorCode.CONTEXT_ERROR, f"Failed to build context: {exc}"
            )
        if isinstance(context_result, Failure):
            self._observer.context_build_failed(
                request_id=request_id,
                code=context_result.code,
                message=context_result.message,
            )
            return failure(context_result.code, context_result.message)

        context = context_result.data
        prompt = self._prompt_builder.build(
            PromptInput(
                core_instructions=context.core_instructions,
                system_prompt=context.system_prompt,
                user_preferences=context.user_preferences,
                memories=context.memories,
                knowledge=context.knowledge,
                history=context.history,
                user_message=request.user_message,
                tools=context.tools,
            )
        )
        self._observer.prompt_built(
            request_id=request_id,
            message_count=len(prompt.messages),
            tool_count=len(prompt.tools),
            estimated_tokens=prompt.estimated_tokens,
        )

        return _PreparedRequest(
            config=config,
            actor=actor,
            loop_input=LoopInput(
                messages=prompt.messages,
                model=config.model,
                tools=prompt.tools,
                temperature=config.temperature,
                max_tokens=config.max_output_tokens,
                context=ToolExecutionContext(
                    user_id=request.user_id,
                    chat_id=request.chat_id,
                    request_id=request_id,
                ),
            ),
        )

    def _new_loop(
        self,
        config: OrchestratorConfig,
        cancel_event: asyncio.Event | None = None,
        on_tool_batch: ToolBatchListener | None = None,
    ) -> ToolLoop:
        return ToolLoop(
            model_client=self._model_client,
            tool_executor=self._tool_executor,
            config=config.loop_config(),
            observer=self._loop_observer,
            cancel_event=cancel_event,
            on_tool_batch=on_tool_batch,
        )

    async def _persist(
        self, actor: ActorContext, chat_id: str, loop_result: LoopResult
    ) -> None:
        """Persist the response; failures are reported to the observer only."""
        usage = _to_result_usage(loop_result)
        response = AssistantResponse(
            content=loop_result.content,
            model=loop_result.model,
            token_count=usage.input_tokens + usage.output_tokens,
            tool_calls=_to_summaries(loop_result.tool_calls),
        )
        try:
            outcome = await self._context_service.persist_response(actor, chat_id, response)
        except Exception as exc:
            self._observer.persistence_failed(
                request_id=actor.request_id, chat_id=chat_id, reason=str(exc)
            )
            return
        if isinstance(outcome, Failure):
            self._observer.persistence_failed(
                request_id=actor.request_id,
                chat_id=chat_id,
                reason=f"{outcome.code}: {outcome.message}",
            )

    def _report_completed(self, request_id: str, loop_result: LoopResult) -> None:
        self._observer.request_completed(
            request_id=request_id,
            iterations=loop_result.iterations,
            tool_calls=len(loop_result.tool_calls),
            stopped_reason=loop_result.stopped_reason,
            input_tokens=loop_result.usage.prompt_tokens,
            output_tokens=loop_result.usage.completion_tokens,
        )


def _validate(request: OrchestratorInput) -> str | None:
    if not request.user_message.strip():
        return "user_message must not be empty"
    if not request.chat_id.strip():
        return "chat_id must not be empty"
    if not request.user_id.strip():
        return "user_id must not be empty"
    return None


def _to_result_usage(loop_result: LoopResult) -> ResultUsage:
    return ResultUsage(
        input_tokens=loop_result.usage.prompt_tokens,
        output_tokens=loop_result.usage.completion_tokens,
    )


def _to_summaries(records: list[ToolCallRecord]) -> list[ToolCallSummary]:
    return [
        ToolCallSummary(
            tool_name=r.tool_name,
            input=r.input,
            output=r.output,
            status=r.status,
            duration_ms=r.duration_ms,
        )
        for r in records
    ]


def _to_orchestrator_result(loop_result: LoopResult) -> OrchestratorResult:
    return OrchestratorResult(
        content=loop_result.content,
        model=loop_result.model,
        usage=_to_result_usage(loop_result),
        tool_calls=_to_summaries(loop_result.tool_calls),
        iterations=loop_result.iterations,
        stopped_reason=loop_result.stopped_reason,
    )
