"""ActorContext value object — who is performing an action against a collaborator."""

from typing import Literal

from pydantic import BaseModel


class ActorContext(BaseModel, frozen=True):
    type: Literal["user", "admin", "system", "ai", "anonymous"]
    request_id: str
    user_id: str | None = None
    permissions: list[str] = []


def ai_actor(request_id: str) -> ActorContext:
    """Actor used by the orchestrator. It holds no permissions of its own."""
    return ActorContext(type="ai", request_id=request_id, permissions=[])
