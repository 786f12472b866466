from typing import Any

import httpx

from ...config import OPENAI_BASE_URL
from ..base import ProviderAdapter, VendorCall, dig
from ..models import ChatRequest, ChatResponse, Provider

IMAGE_CAPTION = "Image generated."


class ImageGenerationAdapter(ProviderAdapter):
    """Adapter for OpenAI-style ``/images/generations`` endpoints.

    Only the last turn is sent, as the prompt; earlier history is ignored.
    Serves both DALL·E 3 and Nano Banana, which differ in endpoint and
    vendor model string only.

    Hidden design decisions:
    - Bearer token authentication
    - Fixed image count and size
    - Fixed caption for every generated image
    """

    provider = Provider.OPENAI

    def __init__(
        self,
        base_url: str = OPENAI_BASE_URL,
        model: str | None = None,
        size: str = "1024x1024",
        label: str = "DALL·E",
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize image adapter.

        Args:
            base_url: API base URL (default: https://api.openai.com/v1)
            model: Vendor model string; None sends the request's model id
            size: Image size, e.g. "1024x1024"
            label: Name used in error messages and logs
            timeout: HTTP timeout in seconds
            client: Optional shared HTTP client
        """
        super().__init__(base_url, timeout=timeout, client=client)
        self._model = model
        self._size = size
        self.label = label

    def build_call(self, request: ChatRequest) -> VendorCall:
        model = self._model or self.vendor_model(request.model)[0]

        return VendorCall(
            url=f"{self.base_url}/images/generations",
            json={
                "model": model,
                "prompt": request.last_turn.content,
                "n": 1,
                "size": self._size,
            },
            headers={"Authorization": f"Bearer {request.api_key}"},
        )

    def parse_response(self, body: Any, request: ChatRequest) -> ChatResponse:
        url = dig(body, "data", 0, "url")
        if not isinstance(url, str) or not url:
            return ChatResponse(content=self.placeholder(request))
        return ChatResponse(content=IMAGE_CAPTION, image_url=url)

