"""Error types raised by model client infrastructure."""

from assistant_core.core.errors import AssistantCoreError, ErrorCode


class ModelInvocationError(AssistantCoreError):
    """Raised when the model backend cannot be reached or rejects the request."""

    def __init__(self, reason: str, retriable: bool = False) -> None:
        super().__init__(
            f"Failed to invoke model: {reason}",
            code=ErrorCode.LLM_ERROR,
            retriable=retriable,
        )
