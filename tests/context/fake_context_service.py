"""FakeContextService — in-memory ContextService for use in tests."""

from dataclasses import dataclass

from assistant_core.context.domain.actor import ActorContext
from assistant_core.context.domain.context import AssistantContext, AssistantResponse
from assistant_core.core.result import Failure, Result, success


@dataclass(frozen=True)
class PersistedResponse:
    actor: ActorContext
    chat_id: str
    response: AssistantResponse


class FakeContextService:
    """Satisfies the ContextService protocol.

    build_context returns `context`, or `build_failure` when set, or raises
    `build_error` when set. persist_response records the response and then
    returns `persist_failure` or raises `persist_error` when set.
    """

    def __init__(
        self,
        context: AssistantContext | None = None,
        build_failure: Failure | None = None,
        build_error: Exception | None = None,
        persist_failure: Failure | None = None,
        persist_error: Exception | None = None,
    ) -> None:
        self._context = context if context is not None else AssistantContext()
        self._build_failure = build_failure
        self._build_error = build_error
        self._persist_failure = persist_failure
        self._persist_error = persist_error
        self.build_calls: list[tuple[ActorContext, str, str]] = []
        self.persisted: list[PersistedResponse] = []

    async def build_context(
        self, actor: ActorContext, chat_id: str, user_message: str
    ) -> Result[AssistantContext]:
        self.build_calls.append((actor, chat_id, user_message))
        if self._build_error is not None:
            raise self._build_error
        if self._build_failure is not None:
            return self._build_failure
        return success(self._context)

    async def persist_response(
        self, actor: ActorContext, chat_id: str, response: AssistantResponse
    ) -> Result[None]:
        self.persisted.append(
            PersistedResponse(actor=actor, chat_id=chat_id, response=response)
        )
        if self._persist_error is not None:
            raise self._persist_error
        if self._persist_failure is not None:
            return self._persist_failure
        return success(None)
