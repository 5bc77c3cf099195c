"""StaticContextService — serves a fixed context and appends responses to a JSONL file."""

import json
from datetime import UTC, datetime
from pathlib import Path

from assistant_core.context.domain.actor import ActorContext
from assistant_core.context.domain.context import AssistantContext, AssistantResponse
from assistant_core.core.errors import ErrorCode
from assistant_core.core.result import Result, failure, success


class StaticContextService:
    """ContextService for single-user, file-backed deployments such as the CLI.

    build_context always returns the context given at construction. When
    transcript_path is set, persist_response appends one JSON object per
    response; otherwise it is a no-op. No per-request state is retained.
    Satisfies the ContextService protocol structurally.
    """

    def __init__(
        self, context: AssistantContext, transcript_path: Path | None = None
    ) -> None:
        self._context = context
        self._transcript_path = transcript_path

    async def build_context(
        self, actor: ActorContext, chat_id: str, user_message: str
    ) -> Result[AssistantContext]:
        return success(self._context)

    async def persist_response(
        self, actor: ActorContext, chat_id: str, response: AssistantResponse
    ) -> Result[None]:
        if self._transcript_path is None:
            return success(None)

        line = {
            "chat_id": chat_id,
            "request_id": actor.request_id,
            "persisted_at": datetime.now(UTC).isoformat(),
            "response": response.model_dump(mode="json"),
        }
        try:
            with self._transcript_path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(line) + "\n")
        except OSError as exc:
            return failure(
                ErrorCode.PERSISTENCE_ERROR,
                f"Failed to persist response to {self._transcript_path}: {exc}",
            )
        return success(None)
