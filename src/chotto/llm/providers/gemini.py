"""Google Gemini adapter for the generateContent REST endpoint.

Reference: https://ai.google.dev/api/generate-content

The API key travels as the ``key`` query parameter, so the request URL is
never logged with its parameters.
"""

from typing import Any

import httpx

from ...config import GEMINI_BASE_URL
from ..base import ProviderAdapter, VendorCall, dig
from ..models import ChatRequest, ChatResponse, ChatTurn, Provider, Role

# Gemini calls the assistant "model"
_ROLE_TO_VENDOR = {
    Role.USER: "user",
    Role.ASSISTANT: "model",
}
_ROLE_FROM_VENDOR = {vendor: role for role, vendor in _ROLE_TO_VENDOR.items()}


class GeminiAdapter(ProviderAdapter):
    """Google Gemini adapter.

    Hidden design decisions:
    - Query-parameter authentication
    - Message format conversion (``contents``/``parts``, ``model`` role)
    - Thinking variants mapped to ``generationConfig.thinkingConfig``
    """

    provider = Provider.GOOGLE
    label = "Gemini"

    VENDOR_MODELS = {
        "gemini-3.0-pro": "gemini-3-pro-preview",
    }

    def __init__(
        self,
        base_url: str = GEMINI_BASE_URL,
        thinking_budget: int = 8192,
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize Gemini adapter.

        Args:
            base_url: API base URL (default: v1beta generativelanguage endpoint)
            thinking_budget: Token budget sent for ``-thinking`` variants
            timeout: HTTP timeout in seconds
            client: Optional shared HTTP client
        """
        super().__init__(base_url, timeout=timeout, client=client)
        self._thinking_budget = thinking_budget

    @staticmethod
    def to_vendor_turns(turns: tuple[ChatTurn, ...]) -> list[dict[str, Any]]:
        return [
            {"role": _ROLE_TO_VENDOR[turn.role], "parts": [{"text": turn.content}]}
            for turn in turns
        ]

    @staticmethod
    def turn_from_vendor(content: dict[str, Any]) -> ChatTurn:
        text = "".join(part.get("text", "") for part in content.get("parts", []))
        return ChatTurn(role=_ROLE_FROM_VENDOR[content["role"]], content=text)

    def build_call(self, request: ChatRequest) -> VendorCall:
        model, thinking = self.vendor_model(request.model)

        payload: dict[str, Any] = {"contents": self.to_vendor_turns(request.messages)}
        if thinking:
            payload["generationConfig"] = {
                "thinkingConfig": {"thinkingBudget": self._thinking_budget}
            }

        return VendorCall(
            url=f"{self.base_url}/models/{model}:generateContent",
            json=payload,
            params={"key": request.api_key},
        )

    def parse_response(self, body: Any, request: ChatRequest) -> ChatResponse:
        parts = dig(body, "candidates", 0, "content", "parts")
        texts = []
        if isinstance(parts, list):
            # Thought summaries are flagged and never part of the answer
            texts = [
                part["text"]
                for part in parts
                if isinstance(part, dict) and isinstance(part.get("text"), str) and not part.get("thought")
            ]
        if not texts:
            return ChatResponse(content=self.placeholder(request))
        return ChatResponse(content="".join(texts))
