"""Structlog implementation of the ModelObserver port."""

import structlog


class StructlogModelObserver:
    """Delegates model client events to structlog.

    Satisfies the ModelObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def model_call_completed(
        self, model: str, duration_ms: int, total_tokens: int
    ) -> None:
        self._log.info(
            "model.call_completed",
            model=model,
            duration_ms=duration_ms,
            total_tokens=total_tokens,
        )

    def model_call_failed(self, model: str, reason: str) -> None:
        self._log.error("model.call_failed", model=model, reason=reason)
