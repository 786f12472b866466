"""
Chotto: a provider-agnostic chat client for OpenAI, Gemini and Claude models.

Requests are routed by model id to a vendor adapter that hides the vendor's
wire format, so callers see one request shape, one response shape and one
error hierarchy.
"""

__version__ = "0.1.0"

from .config import Settings
from .dispatcher import Dispatcher
from .errors import (
    ChottoError,
    MissingCredential,
    ModelNotRegistered,
    ProviderError,
    SessionBusy,
    TransportFailure,
)
from .llm import (
    Attachment,
    ChatRequest,
    ChatResponse,
    ChatTurn,
    ModelCategory,
    ModelDescriptor,
    Provider,
    Role,
    resolve,
)
from .session import ChatMessage, ChatSession

__all__ = [
    "Attachment",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ChatSession",
    "ChatTurn",
    "ChottoError",
    "Dispatcher",
    "MissingCredential",
    "ModelCategory",
    "ModelDescriptor",
    "ModelNotRegistered",
    "Provider",
    "ProviderError",
    "Role",
    "SessionBusy",
    "Settings",
    "TransportFailure",
    "resolve",
]
