"""LoopConfig value object — safety limits for one tool-loop run."""

from pydantic import BaseModel, Field


class LoopConfig(BaseModel, frozen=True):
    max_iterations: int = Field(ge=1)
    max_tool_calls: int = Field(ge=0)
    tool_call_timeout_ms: int = Field(gt=0)
