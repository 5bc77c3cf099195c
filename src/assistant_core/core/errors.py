"""Base exception class and error codes for all assistant-core errors."""

from enum import StrEnum


class ErrorCode(StrEnum):
    """Request-level error codes surfaced in Failure results and error events."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    LLM_ERROR = "LLM_ERROR"
    CONTEXT_ERROR = "CONTEXT_ERROR"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AssistantCoreError(Exception):
    """Base class for all assistant-core errors."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCode.INTERNAL_ERROR,
        retriable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.retriable = retriable
