"""In-memory chat sessions.

A session holds the visible conversation and turns each user send into a
single dispatch.
"""

from .chat import ChatSession
from .models import ChatMessage

__all__ = ["ChatMessage", "ChatSession"]
