"""ModelObserver port — domain events emitted around model calls."""

from typing import Protocol


class ModelObserver(Protocol):
    def model_call_completed(
        self, model: str, duration_ms: int, total_tokens: int
    ) -> None: ...

    def model_call_failed(self, model: str, reason: str) -> None: ...
