"""Top-level AppConfig aggregate — the root configuration object."""

from pathlib import Path

from pydantic import BaseModel, Field

from assistant_core.config.domain.llm import LlmConfig
from assistant_core.context.domain.context import AssistantContext
from assistant_core.orchestration.domain.config import OrchestratorConfig


class AppConfig(BaseModel, frozen=True):
    """Root configuration aggregate for an assistant deployment."""

    name: str = Field(min_length=1)
    llm: LlmConfig = LlmConfig()
    orchestrator: OrchestratorConfig = OrchestratorConfig()
    context: AssistantContext = AssistantContext()
    # JSONL file that persisted responses are appended to; not persisted when unset.
    transcript_path: Path | None = None
