from typing import Any

import httpx

from ...config import OPENAI_BASE_URL
from ..base import ProviderAdapter, VendorCall, dig
from ..models import ChatRequest, ChatResponse, ChatTurn, Provider, Role

# Chat Completions uses the internal role names unchanged
_ROLE_TO_VENDOR = {
    Role.USER: "user",
    Role.ASSISTANT: "assistant",
}
_ROLE_FROM_VENDOR = {vendor: role for role, vendor in _ROLE_TO_VENDOR.items()}


class OpenAIChatAdapter(ProviderAdapter):
    """OpenAI Chat Completions adapter.

    Hidden design decisions:
    - Bearer token authentication
    - Message format conversion
    - Thinking variants mapped to ``reasoning_effort``
    """

    provider = Provider.OPENAI
    label = "OpenAI"

    def __init__(
        self,
        base_url: str = OPENAI_BASE_URL,
        reasoning_effort: str = "high",
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize OpenAI adapter.

        Args:
            base_url: API base URL (default: https://api.openai.com/v1)
            reasoning_effort: Effort sent for ``-thinking`` variants
            timeout: HTTP timeout in seconds
            client: Optional shared HTTP client
        """
        super().__init__(base_url, timeout=timeout, client=client)
        self._reasoning_effort = reasoning_effort

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
            "messages": self.to_vendor_turns(request.messages),
        }
        if thinking:
            payload["reasoning_effort"] = self._reasoning_effort

        return VendorCall(
            url=f"{self.base_url}/chat/completions",
            json=payload,
            headers={"Authorization": f"Bearer {request.api_key}"},
        )

    def parse_response(self, body: Any, request: ChatRequest) -> ChatResponse:
        content = dig(body, "choices", 0, "message", "content")
        if not isinstance(content, str):
            content = self.placeholder(request)
        return ChatResponse(content=content)
