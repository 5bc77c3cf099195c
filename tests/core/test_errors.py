"""Tests verifying the AssistantCoreError type hierarchy and error codes."""

from pathlib import Path

from assistant_core.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)
from assistant_core.core.errors import AssistantCoreError, ErrorCode
from assistant_core.llm.infrastructure.errors import ModelInvocationError
from assistant_core.loop.domain.errors import LoopCancelledError, ModelResponseError


class TestAssistantCoreErrorHierarchy:
    """All assistant-core exceptions inherit from AssistantCoreError."""

    def test_missing_env_vars_error_is_core_error(self) -> None:
        error = MissingEnvVarsError(missing_vars=["MY_VAR"])
        assert isinstance(error, AssistantCoreError)

    def test_config_validation_error_is_core_error(self) -> None:
        error = ConfigValidationError(reason="bad value")
        assert isinstance(error, AssistantCoreError)

    def test_config_load_error_is_core_error(self) -> None:
        error = ConfigLoadError(path=Path("/some/config.yaml"))
        assert isinstance(error, AssistantCoreError)

    def test_model_invocation_error_is_core_error(self) -> None:
        assert isinstance(ModelInvocationError(reason="boom"), AssistantCoreError)

    def test_core_error_is_exception(self) -> None:
        assert isinstance(AssistantCoreError("test"), Exception)

    def test_core_error_defaults_to_internal_and_not_retriable(self) -> None:
        error = AssistantCoreError("test")
        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.retriable is False


class TestErrorCodes:
    """Each error type carries the code surfaced to callers."""

    def test_config_errors_carry_config_code(self) -> None:
        assert MissingEnvVarsError(["A"]).code == ErrorCode.CONFIG_ERROR
        assert ConfigValidationError("x").code == ErrorCode.CONFIG_ERROR
        assert ConfigLoadError(Path("x.yaml")).code == ErrorCode.CONFIG_ERROR

    def test_model_errors_carry_llm_code(self) -> None:
        assert ModelInvocationError("x").code == ErrorCode.LLM_ERROR
        assert ModelResponseError("x").code == ErrorCode.LLM_ERROR

    def test_model_invocation_error_can_be_retriable(self) -> None:
        assert ModelInvocationError("rate limited", retriable=True).retriable is True

    def test_error_codes_compare_equal_to_strings(self) -> None:
        assert ErrorCode.VALIDATION_ERROR == "VALIDATION_ERROR"


class TestErrorMessages:
    """Error messages start with 'Failed to' and carry their detail."""

    def test_missing_env_vars_lists_sorted_names(self) -> None:
        error = MissingEnvVarsError(missing_vars=["ZETA", "ALPHA"])
        assert str(error).startswith("Failed to ")
        assert "ALPHA, ZETA" in str(error)
        assert error.missing_vars == ["ZETA", "ALPHA"]

    def test_config_load_error_includes_path(self) -> None:
        error = ConfigLoadError(path=Path("/etc/assistant.yaml"))
        assert "/etc/assistant.yaml" in str(error)
        assert "file not found" in str(error)

    def test_loop_cancelled_error_records_iterations(self) -> None:
        error = LoopCancelledError(iterations=3)
        assert error.iterations == 3
        assert str(error).startswith("Failed to ")
