"""Model backend connection configuration."""

from pydantic import BaseModel, Field


class LlmConfig(BaseModel, frozen=True):
    api_base: str | None = None
    api_key: str | None = None
    timeout_seconds: float = Field(default=120.0, gt=0)
    # OpenRouter attribution headers; omitted when unset.
    site_url: str | None = None
    site_name: str | None = None
