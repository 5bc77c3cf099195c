"""Error types raised by the tool loop."""

from assistant_core.core.errors import AssistantCoreError, ErrorCode


class ModelResponseError(AssistantCoreError):
    """Raised when the model returns a response the loop cannot use."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Failed to read model response: {reason}", code=ErrorCode.LLM_ERROR
        )


class LoopCancelledError(AssistantCoreError):
    """Raised at an iteration or batch boundary once cancellation was requested."""

    def __init__(self, iterations: int) -> None:
        self.iterations = iterations
        super().__init__(
            f"Failed to complete tool loop: cancelled after {iterations} iterations"
        )
