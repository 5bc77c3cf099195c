"""OrchestratorObserver port — request-level domain events."""

from typing import Protocol


class OrchestratorObserver(Protocol):
    """Observer port for orchestration requests.

    persistence failures are only visible through this port, since they never
    change the result returned to the caller.
    """

    def request_started(
        self, request_id: str, chat_id: str, model: str, mode: str
    ) -> None: ...

    def request_rejected(self, request_id: str, reason: str) -> None: ...

    def context_build_failed(self, request_id: str, code: str, message: str) -> None: ...

    def prompt_built(
        self, request_id: str, message_count: int, tool_count: int, estimated_tokens: int
    ) -> None: ...

    def model_failed(self, request_id: str, reason: str) -> None: ...

    def persistence_failed(self, request_id: str, chat_id: str, reason: str) -> None: ...

    def request_completed(
        self,
        request_id: str,
        iterations: int,
        tool_calls: int,
        stopped_reason: str | None,
        input_tokens: int,
        output_tokens: int,
    ) -> None: ...

    def stream_abandoned(self, request_id: str) -> None: ...
