from .anthropic import AnthropicAdapter
from .gemini import GeminiAdapter
from .images import IMAGE_CAPTION, ImageGenerationAdapter
from .openai import OpenAIChatAdapter

__all__ = [
    "AnthropicAdapter",
    "GeminiAdapter",
    "IMAGE_CAPTION",
    "ImageGenerationAdapter",
    "OpenAIChatAdapter",
]
