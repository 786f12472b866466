"""Anthropic Claude adapter for the Messages API.

Reference: https://docs.anthropic.com/en/api/messages
"""

from typing import Any

import httpx

from ...config import ANTHROPIC_BASE_URL, ANTHROPIC_VERSION
from ..base import ProviderAdapter, VendorCall, dig
from ..models import ChatRequest, ChatResponse, ChatTurn, Provider, Role

_ROLE_TO_VENDOR = {
    Role.USER: "user",
    Role.ASSISTANT: "assistant",
}
_ROLE_FROM_VENDOR = {vendor: role for role, vendor in _ROLE_TO_VENDOR.items()}


class AnthropicAdapter(ProviderAdapter):
    """Anthropic Claude adapter.

    Hidden design decisions:
    - ``x-api-key`` and ``anthropic-version`` headers
    - Mandatory ``max_tokens`` bound
    - Thinking variants mapped to ``thinking.budget_tokens``
    - Picking the text block out of mixed thinking/text content
    """

    provider = Provider.ANTHROPIC
    label = "Anthropic"

    VENDOR_MODELS = {
        "claude-3-5-sonnet": "claude-3-5-sonnet-latest",
        "claude-4-6-sonnet": "claude-sonnet-4-6",
    }

    def __init__(
        self,
        base_url: str = ANTHROPIC_BASE_URL,
        api_version: str = ANTHROPIC_VERSION,
        max_tokens: int = 4096,
        thinking_budget: int = 2048,
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize Anthropic adapter.

        Args:
            base_url: API base URL (default: https://api.anthropic.com/v1)
            api_version: Value of the ``anthropic-version`` header
            max_tokens: Output bound (Anthropic requires max_tokens)
            thinking_budget: Budget sent for ``-thinking`` variants
            timeout: HTTP timeout in seconds
            client: Optional shared HTTP client
        """
        super().__init__(base_url, timeout=timeout, client=client)
        self._api_version = api_version
        self._max_tokens = max_tokens
        self._thinking_budget = thinking_budget

    @staticmethod
    def to_vendor_turns(turns: tuple[ChatTurn, ...]) -> list[dict[str, str]]:
        return [{"role": _ROLE_TO_VENDOR[turn.role], "content": turn.content} for turn in turns]

    @staticmethod
    def turn_from_vendor(message: dict[str, Any]) -> ChatTurn:
        return ChatTurn(role=_ROLE_FROM_VENDOR[message["role"]], content=message["content"])

    def build_call(self, request: ChatRequest) -> VendorCall:
        model, thinking = self.vendor_model(request.model)

        payload: dict[str, Any] = {
            "model": model,
            "max_tokens": self._max_tokens,
            "messages": self.to_vendor_turns(request.messages),
        }
        if thinking:
            payload["thinking"] = {"type": "enabled", "budget_tokens": self._thinking_budget}
            # budget_tokens must stay below max_tokens
            payload["max_tokens"] = max(self._max_tokens, self._thinking_budget + 1024)

        return VendorCall(
            url=f"{self.base_url}/messages",
            json=payload,
            headers={
                "x-api-key": request.api_key,
                "anthropic-version": self._api_version,
            },
        )

    def parse_response(self, body: Any, request: ChatRequest) -> ChatResponse:
        blocks = dig(body, "content")
        if isinstance(blocks, list):
            for block in blocks:
                if isinstance(block, dict) and block.get("type") == "text" and isinstance(block.get("text"), str):
                    return ChatResponse(content=block["text"])

        content = dig(body, "content", 0, "text")
        if not isinstance(content, str):
            content = self.placeholder(request)
        return ChatResponse(content=content)
