"""Error types raised by config infrastructure."""

from pathlib import Path

from assistant_core.core.errors import AssistantCoreError, ErrorCode


class MissingEnvVarsError(AssistantCoreError):
    """Raised when one or more required environment variables are not set."""

    def __init__(self, missing_vars: list[str]) -> None:
        self.missing_vars = missing_vars
        var_list = ", ".join(sorted(missing_vars))
        super().__init__(
            f"Failed to load config: missing environment variables: {var_list}",
            code=ErrorCode.CONFIG_ERROR,
        )


class ConfigValidationError(AssistantCoreError):
    """Raised when the loaded config fails schema or semantic validation."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Failed to validate config: {reason}", code=ErrorCode.CONFIG_ERROR
        )


class ConfigLoadError(AssistantCoreError):
    """Raised when the config file cannot be opened, read or parsed."""

    def __init__(self, path: Path, reason: str = "file not found") -> None:
        self.path = path
        super().__init__(
            f"Failed to load config: {reason}: {path}", code=ErrorCode.CONFIG_ERROR
        )
