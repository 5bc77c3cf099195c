"""OrchestratorInput and OrchestratorResult — the public request/response shapes."""

from pydantic import BaseModel

from assistant_core.context.domain.context import ToolCallSummary
from assistant_core.loop.domain.result import StoppedReason
from assistant_core.orchestration.domain.config import ConfigOverrides


class OrchestratorInput(BaseModel, frozen=True):
    user_message: str
    chat_id: str
    user_id: str
    config_overrides: ConfigOverrides | None = None


class ResultUsage(BaseModel, frozen=True):
    input_tokens: int
    output_tokens: int


class OrchestratorResult(BaseModel, frozen=True):
    content: str
    model: str
    usage: ResultUsage
    tool_calls: list[ToolCallSummary]
    iterations: int
    stopped_reason: StoppedReason | None = None
