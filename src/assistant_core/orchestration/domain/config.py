"""OrchestratorConfig — request-scoped model and safety-limit settings."""

from pydantic import BaseModel, Field

from assistant_core.loop.domain.config import LoopConfig


class ConfigOverrides(BaseModel, frozen=True):
    """Per-request overrides; unset fields fall back to the baseline config."""

    model: str | None = None
    max_input_tokens: int | None = None
    max_output_tokens: int | None = None
    max_tool_calls: int | None = None
    max_iterations: int | None = None
    tool_call_timeout_ms: int | None = None
    total_timeout_ms: int | None = None
    temperature: float | None = None


class OrchestratorConfig(BaseModel, frozen=True):
    """Baseline configuration shared by every request of one orchestrator.

    total_timeout_ms is carried for callers that wrap a request in an overall
    deadline; the orchestrator itself only enforces per-tool-call timeouts.
    """

    model: str = Field(default="openrouter/anthropic/claude-3.5-sonnet", min_length=1)
    max_input_tokens: int = Field(default=100_000, ge=1)
    max_output_tokens: int = Field(default=4096, ge=1)
    max_tool_calls: int = Field(default=10, ge=0)
    max_iterations: int = Field(default=5, ge=1)
    tool_call_timeout_ms: int = Field(default=30_000, gt=0)
    total_timeout_ms: int = Field(default=120_000, gt=0)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)

    def merged(self, overrides: ConfigOverrides | None) -> "OrchestratorConfig":
        """Return a new validated config with overrides applied on top of self.

        Raises:
            pydantic.ValidationError: if an override violates a field constraint.
        """
        if overrides is None:
            return self
        return OrchestratorConfig.model_validate(
            {**self.model_dump(), **overrides.model_dump(exclude_none=True)}
        )

    def loop_config(self) -> LoopConfig:
        return LoopConfig(
            max_iterations=self.max_iterations,
            max_tool_calls=self.max_tool_calls,
            tool_call_timeout_ms=self.tool_call_timeout_ms,
        )
