import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from ..errors import MissingCredential, ProviderError, TransportFailure
from .models import ChatRequest, ChatResponse, Provider

logger = logging.getLogger(__name__)

THINKING_SUFFIX = "-thinking"

# Content returned when a vendor answers successfully but without the expected field
EMPTY_RESPONSE_PLACEHOLDER = "(empty response)"


def split_variant(model_id: str) -> tuple[str, bool]:
    """Split a model id into its base id and extended-reasoning flag.

    >>> split_variant("gpt-5-thinking")
    ('gpt-5', True)
    >>> split_variant("gpt-5")
    ('gpt-5', False)
    """
    if model_id.endswith(THINKING_SUFFIX) and len(model_id) > len(THINKING_SUFFIX):
        return model_id[: -len(THINKING_SUFFIX)], True
    return model_id, False


def dig(data: Any, *path: str | int) -> Any:
    """Walk nested dicts/lists, returning None as soon as a step is missing.

    Args:
        data: Decoded JSON value
        *path: Dict keys (str) and list indexes (int)

    Returns:
        The value at the path, or None
    """
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
        elif not isinstance(current, dict) or step not in current:
            return None
        current = current[step]
    return current


def extract_error_message(body: Any) -> str | None:
    """Return the vendor's ``error.message`` if the body carries one."""
    message = dig(body, "error", "message")
    if isinstance(message, str) and message.strip():
        return message.strip()
    return None


@dataclass(frozen=True)
class VendorCall:
    """A fully translated HTTP call, ready to send."""

    url: str
    json: dict[str, Any]
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, str] = field(default_factory=dict)


class ProviderAdapter(ABC):
    """Translation unit between the internal chat schema and one vendor API.

    This module hides the design decision of how a vendor is spoken to.
    Subclasses own:
    - Vendor role vocabulary and payload layout
    - Mapping of internal model ids (and their variants) to vendor model strings
    - Extraction of the answer from the vendor's response body

    The base class owns the steps that are identical for every vendor: the
    credential gate, the single HTTP call, and error translation.

    Supports async context manager protocol for proper resource cleanup:
        async with adapter:
            response = await adapter.invoke(request)
    """

    provider: Provider
    label: str

    # Internal base model id -> vendor model string; unknown ids pass through
    VENDOR_MODELS: Mapping[str, str] = {}

    def __init__(
        self,
        base_url: str,
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the adapter.

        Args:
            base_url: Vendor API base URL (no trailing slash needed)
            timeout: HTTP timeout in seconds, used when no client is given
            client: Shared HTTP client; when omitted the adapter creates and owns one
        """
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    def vendor_model(self, model_id: str) -> tuple[str, bool]:
        """Resolve an internal model id to the vendor model string.

        Returns:
            Tuple of (vendor model, extended reasoning requested)
        """
        base_id, thinking = split_variant(model_id)
        return self.VENDOR_MODELS.get(base_id, base_id), thinking

    async def invoke(self, request: ChatRequest) -> ChatResponse:
        """Send one request to the vendor and normalize the answer.

        Args:
            request: Provider-agnostic chat request

        Returns:
            ChatResponse with the vendor's answer

        Raises:
            MissingCredential: If the request carries no API key (no call is made)
            ProviderError: If the vendor answers with a non-success status
            TransportFailure: If the vendor cannot be reached
        """
        if not request.api_key.strip():
            raise MissingCredential(self.provider.value, model=request.model)

        if request.attachments:
            logger.warning(
                "%s: %d attachment(s) not forwarded to vendor",
                self.label,
                len(request.attachments),
            )

        call = self.build_call(request)
        logger.debug(
            "%s: POST %s model=%s turns=%d",
            self.label,
            call.url,
            call.json.get("model", "-"),
            len(request.messages),
        )
        body = await self._send(call, request.model)
        return self.parse_response(body, request)

    @abstractmethod
    def build_call(self, request: ChatRequest) -> VendorCall:
        """Translate a request into the vendor's HTTP call.

        Args:
            request: Request with a non-empty API key

        Returns:
            VendorCall with URL, headers, query params and JSON body
        """
        pass

    @abstractmethod
    def parse_response(self, body: Any, request: ChatRequest) -> ChatResponse:
        """Translate a successful vendor body into a ChatResponse.

        Must not raise on an unexpected shape; missing fields degrade to
        EMPTY_RESPONSE_PLACEHOLDER.
        """
        pass

    def placeholder(self, request: ChatRequest) -> str:
        logger.warning("%s: response for %s lacked the expected field", self.label, request.model)
        return EMPTY_RESPONSE_PLACEHOLDER

    async def _send(self, call: VendorCall, model_id: str) -> Any:
        try:
            response = await self._client.post(
                call.url,
                json=call.json,
                headers=dict(call.headers),
                params=dict(call.params),
            )
        except httpx.HTTPError as e:
            logger.warning("%s: transport failure for %s: %s", self.label, model_id, type(e).__name__)
            raise TransportFailure(e, provider=self.provider.value, model=model_id) from e

        body = _decode_json(response)

        if not response.is_success:
            message = extract_error_message(body) or (
                f"{self.label} API request failed with status "
                f"{response.status_code} {response.reason_phrase}".rstrip()
            )
            logger.warning("%s: status %d for %s", self.label, response.status_code, model_id)
            raise ProviderError(
                message,
                provider=self.provider.value,
                model=model_id,
                status_code=response.status_code,
            )

        return body

    async def close(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ProviderAdapter":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise


def _decode_json(response: httpx.Response) -> Any:
    """Decode a JSON body, returning None for empty or non-JSON bodies."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
