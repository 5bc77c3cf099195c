"""Structlog implementation of the LoopObserver port."""

import structlog


class StructlogLoopObserver:
    """Delegates tool-loop events to structlog.

    Satisfies the LoopObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def loop_iteration_started(self, request_id: str, iteration: int) -> None:
        self._log.debug(
            "loop.iteration_started", request_id=request_id, iteration=iteration
        )

    def loop_tool_call_completed(
        self,
        request_id: str,
        tool_call_id: str,
        tool_name: str,
        status: str,
        duration_ms: int,
        error_message: str | None,
    ) -> None:
        log = self._log.info if status == "success" else self._log.warning
        log(
            "loop.tool_call_completed",
            request_id=request_id,
            tool_call_id=tool_call_id,
            tool_name=tool_name,
            status=status,
            duration_ms=duration_ms,
            error_message=error_message,
        )

    def loop_completed(
        self, request_id: str, iterations: int, total_tool_calls: int
    ) -> None:
        self._log.info(
            "loop.completed",
            request_id=request_id,
            iterations=iterations,
            total_tool_calls=total_tool_calls,
        )

    def loop_stopped(
        self,
        request_id: str,
        reason: str,
        iterations: int,
        total_tool_calls: int,
    ) -> None:
        self._log.warning(
            "loop.stopped",
            request_id=request_id,
            reason=reason,
            iterations=iterations,
            total_tool_calls=total_tool_calls,
        )

    def loop_cancelled(self, request_id: str, iterations: int) -> None:
        self._log.info(
            "loop.cancelled", request_id=request_id, iterations=iterations
        )
