"""Data models for session history."""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from ..llm.models import Attachment, ChatTurn, Role


class ChatMessage(BaseModel):
    """A message shown in the conversation.

    Unlike a ChatTurn, a message remembers which model produced it, any
    generated image and whether it is a rendered failure.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: f"msg-{uuid4().hex}")
    role: Role
    content: str
    image_url: str | None = Field(default=None, description="Generated image reference")
    attachments: tuple[Attachment, ...] = Field(default=())
    model: str = Field(description="Model selected when the message was created")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_error: bool = Field(default=False, description="Rendered failure, not a model answer")

    def to_turn(self) -> ChatTurn:
        return ChatTurn(role=self.role, content=self.content)
