"""LoopObserver port — domain events emitted while a tool loop runs."""

from typing import Protocol


class LoopObserver(Protocol):
    """Observer port for tool-loop events.

    Implementations may log to structlog, record for tests, or emit metrics.
    """

    def loop_iteration_started(self, request_id: str, iteration: int) -> None: ...

    def loop_tool_call_completed(
        self,
        request_id: str,
        tool_call_id: str,
        tool_name: str,
        status: str,
        duration_ms: int,
        error_message: str | None,
    ) -> None: ...

    def loop_completed(
        self, request_id: str, iterations: int, total_tool_calls: int
    ) -> None: ...

    def loop_stopped(
        self,
        request_id: str,
        reason: str,
        iterations: int,
        total_tool_calls: int,
    ) -> None: ...

    def loop_cancelled(self, request_id: str, iterations: int) -> None: ...
