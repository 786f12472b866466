from .base import EMPTY_RESPONSE_PLACEHOLDER, ProviderAdapter, VendorCall, split_variant
from .factory import create_adapter
from .models import (
    Attachment,
    AttachmentKind,
    ChatRequest,
    ChatResponse,
    ChatTurn,
    ModelCategory,
    ModelDescriptor,
    Provider,
    Role,
)
from .providers import (
    IMAGE_CAPTION,
    AnthropicAdapter,
    GeminiAdapter,
    ImageGenerationAdapter,
    OpenAIChatAdapter,
)
from .registry import MODELS, is_registered, list_models, resolve

__all__ = [
    "EMPTY_RESPONSE_PLACEHOLDER",
    "IMAGE_CAPTION",
    "MODELS",
    "AnthropicAdapter",
    "Attachment",
    "AttachmentKind",
    "ChatRequest",
    "ChatResponse",
    "ChatTurn",
    "GeminiAdapter",
    "ImageGenerationAdapter",
    "ModelCategory",
    "ModelDescriptor",
    "OpenAIChatAdapter",
    "Provider",
    "ProviderAdapter",
    "Role",
    "VendorCall",
    "create_adapter",
    "is_registered",
    "list_models",
    "resolve",
    "split_variant",
]
