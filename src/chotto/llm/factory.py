from typing import Any

from .base import ProviderAdapter
from .providers import AnthropicAdapter, GeminiAdapter, ImageGenerationAdapter, OpenAIChatAdapter


def create_adapter(adapter: str, **config: Any) -> ProviderAdapter:
    """Create a provider adapter instance.

    This factory function hides the instantiation logic for different vendors.
    Credentials are not part of the configuration; they travel with each
    request.

    Args:
        adapter: Adapter type ('openai', 'gemini', 'anthropic', 'image', 'nano-banana')
        **config: Adapter-specific configuration
            For all adapters:
                - base_url: str
                - timeout: float (default: 120.0)
                - client: httpx.AsyncClient | None
            For OpenAI:
                - reasoning_effort: str (default: 'high')
            For Gemini:
                - thinking_budget: int (default: 8192)
            For Anthropic (Claude):
                - api_version: str (default: '2023-06-01')
                - max_tokens: int (default: 4096)
                - thinking_budget: int (default: 2048)
            For image generation:
                - model: str | None
                - size: str (default: '1024x1024')

    Returns:
        Initialized adapter instance

    Raises:
        ValueError: If adapter type is not supported

    Examples:
        >>> adapter = create_adapter("anthropic", max_tokens=2048)

        >>> adapter = create_adapter(
        ...     "nano-banana",
        ...     base_url="https://images.example.com/v1",
        ...     model="nano-banana"
        ... )
    """
    adapter_lower = adapter.lower()

    if adapter_lower == "openai":
        return OpenAIChatAdapter(**config)

    if adapter_lower in ("gemini", "google"):
        return GeminiAdapter(**config)

    if adapter_lower in ("anthropic", "claude"):
        return AnthropicAdapter(**config)

    if adapter_lower in ("image", "dall-e"):
        return ImageGenerationAdapter(**config)

    if adapter_lower == "nano-banana":
        config.setdefault("label", "Nano Banana")
        return ImageGenerationAdapter(**config)

    raise ValueError(
        f"Unsupported adapter: {adapter}. "
        f"Supported adapters: 'openai', 'gemini', 'anthropic', 'image', 'nano-banana'"
    )
