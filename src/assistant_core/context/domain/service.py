"""ContextService Protocol — the narrow port onto context assembly and persistence."""

from typing import Protocol

from assistant_core.context.domain.actor import ActorContext
from assistant_core.context.domain.context import AssistantContext, AssistantResponse
from assistant_core.core.result import Result


class ContextService(Protocol):
    """Assembles layered context before a request and stores the response after it.

    Both operations are fallible and report failure as a Failure result.
    """

    async def build_context(
        self, actor: ActorContext, chat_id: str, user_message: str
    ) -> Result[AssistantContext]: ...

    async def persist_response(
        self, actor: ActorContext, chat_id: str, response: AssistantResponse
    ) -> Result[None]: ...
