"""Structlog implementation of the OrchestratorObserver port."""

import structlog


class StructlogOrchestratorObserver:
    """Delegates orchestration events to structlog.

    Satisfies the OrchestratorObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def request_started(
        self, request_id: str, chat_id: str, model: str, mode: str
    ) -> None:
        self._log.info(
            "orchestrator.request_started",
            request_id=request_id,
            chat_id=chat_id,
            model=model,
            mode=mode,
        )

    def request_rejected(self, request_id: str, reason: str) -> None:
        self._log.warning(
            "orchestrator.request_rejected", request_id=request_id, reason=reason
        )

    def context_build_failed(self, request_id: str, code: str, message: str) -> None:
        self._log.error(
            "orchestrator.context_build_failed",
            request_id=request_id,
            code=code,
            message=message,
        )

    def prompt_built(
        self, request_id: str, message_count: int, tool_count: int, estimated_tokens: int
    ) -> None:
        self._log.debug(
            "orchestrator.prompt_built",
            request_id=request_id,
            message_count=message_count,
            tool_count=tool_count,
            estimated_tokens=estimated_tokens,
        )

    def model_failed(self, request_id: str, reason: str) -> None:
        self._log.error(
            "orchestrator.model_failed", request_id=request_id, reason=reason
        )

    def persistence_failed(self, request_id: str, chat_id: str, reason: str) -> None:
        self._log.error(
            "orchestrator.persistence_failed",
            request_id=request_id,
            chat_id=chat_id,
            reason=reason,
        )

    def request_completed(
        self,
        request_id: str,
        iterations: int,
        tool_calls: int,
        stopped_reason: str | None,
        input_tokens: int,
        output_tokens: int,
    ) -> None:
        self._log.info(
            "orchestrator.request_completed",
            request_id=request_id,
            iterations=iterations,
            tool_calls=tool_calls,
            stopped_reason=stopped_reason,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

    def stream_abandoned(self, request_id: str) -> None:
        self._log.info("orchestrator.stream_abandoned", request_id=request_id)
