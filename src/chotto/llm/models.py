import mimetypes
from enum import Enum
from pathlib import Path
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Provider(str, Enum):
    """Vendor organization that owns a model."""

    OPENAI = "openai"
    GOOGLE = "google"
    ANTHROPIC = "anthropic"


class ModelCategory(str, Enum):
    """What a model produces."""

    TEXT = "text"
    IMAGE = "image"


class Role(str, Enum):
    """Role of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class AttachmentKind(str, Enum):
    """Kind of file a user attached to a turn."""

    IMAGE = "image"
    DOCUMENT = "document"


# MIME types accepted as attachments and the kind each maps to
ATTACHMENT_MIME_TYPES = {
    "image/jpeg": AttachmentKind.IMAGE,
    "image/png": AttachmentKind.IMAGE,
    "application/pdf": AttachmentKind.DOCUMENT,
}


class ModelDescriptor(BaseModel):
    """A registered model and the provider that serves it."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Internal model identifier")
    label: str = Field(description="Display label")
    provider: Provider = Field(description="Owning provider")
    category: ModelCategory = Field(description="Text or image generation")


class ChatTurn(BaseModel):
    """One role-tagged message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Role of the message sender: 'user' or 'assistant'")
    content: str = Field(description="Content of the message")


class Attachment(BaseModel):
    """A file attached to a user turn.

    The content is carried as raw bytes; adapters currently do not forward
    it to any vendor.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    content: bytes = Field(repr=False, description="Raw file content")
    kind: AttachmentKind = Field(description="Image or document")
    name: str = Field(description="Display name")
    preview_url: str | None = Field(default=None, description="Optional preview reference")

    @classmethod
    def from_path(cls, path: str | Path) -> "Attachment":
        """Load an attachment from disk, classifying it by MIME type.

        Args:
            path: File to attach

        Returns:
            Attachment with the file's bytes

        Raises:
            ValueError: If the file type is not an accepted image or PDF
        """
        file_path = Path(path)
        mime_type, _ = mimetypes.guess_type(file_path.name)
        kind = ATTACHMENT_MIME_TYPES.get(mime_type or "")
        if kind is None:
            raise ValueError(
                f"Unsupported attachment type for {file_path.name}: {mime_type or 'unknown'}. "
                f"Supported types: {', '.join(ATTACHMENT_MIME_TYPES)}"
            )

        return cls(
            content=file_path.read_bytes(),
            kind=kind,
            name=file_path.name,
            preview_url=file_path.resolve().as_uri() if kind == AttachmentKind.IMAGE else None,
        )


class ChatRequest(BaseModel):
    """A provider-agnostic request for one assistant answer."""

    model_config = ConfigDict(frozen=True)

    model: str = Field(description="Target model id")
    messages: tuple[ChatTurn, ...] = Field(
        min_length=1,
        description="Conversation history in chronological order"
    )
    attachments: tuple[Attachment, ...] = Field(default=(), description="Files attached to the send")
    api_key: str = Field(default="", repr=False, description="Credential for the model's provider")

    @property
    def last_turn(self) -> ChatTurn:
        """The most recent turn, used as the prompt by image models."""
        return self.messages[-1]


class ChatResponse(BaseModel):
    """Normalized answer from a provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text content or image caption")
    image_url: str | None = Field(
        default=None,
        description="Generated image reference (image models only)"
    )
