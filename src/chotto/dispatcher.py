"""Routing of chat requests to provider adapters.

The Dispatcher is the single entry point a UI calls. It resolves the
request's model through the registry, looks the model up in a static route
table and hands the request to the adapter for that route.
"""

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

import httpx

from .config import Settings
from .credentials import CredentialStore
from .llm import ChatRequest, ChatResponse, ModelCategory, ModelDescriptor, Provider, ProviderAdapter, create_adapter
from .llm.registry import MODELS, resolve

logger = logging.getLogger(__name__)


class AdapterKind(str, Enum):
    """Adapter implementations a model can be routed to."""

    OPENAI_CHAT = "openai-chat"
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"
    OPENAI_IMAGE = "openai-image"
    NANO_BANANA = "nano-banana"


# Provider and category every model routed to a kind must have
ADAPTER_SIGNATURES: dict[AdapterKind, tuple[Provider, ModelCategory]] = {
    AdapterKind.OPENAI_CHAT: (Provider.OPENAI, ModelCategory.TEXT),
    AdapterKind.GEMINI: (Provider.GOOGLE, ModelCategory.TEXT),
    AdapterKind.ANTHROPIC: (Provider.ANTHROPIC, ModelCategory.TEXT),
    AdapterKind.OPENAI_IMAGE: (Provider.OPENAI, ModelCategory.IMAGE),
    AdapterKind.NANO_BANANA: (Provider.OPENAI, ModelCategory.IMAGE),
}

MODEL_ROUTES: dict[str, AdapterKind] = {
    "gpt-4o": AdapterKind.OPENAI_CHAT,
    "gpt-5": AdapterKind.OPENAI_CHAT,
    "gpt-5-thinking": AdapterKind.OPENAI_CHAT,
    "gemini-1.5-pro": AdapterKind.GEMINI,
    "gemini-3.0-pro": AdapterKind.GEMINI,
    "gemini-3.0-pro-thinking": AdapterKind.GEMINI,
    "claude-3-5-sonnet": AdapterKind.ANTHROPIC,
    "claude-4-6-sonnet": AdapterKind.ANTHROPIC,
    "claude-4-6-sonnet-thinking": AdapterKind.ANTHROPIC,
    "dall-e-3": AdapterKind.OPENAI_IMAGE,
    "nano-banana": AdapterKind.NANO_BANANA,
}


def check_routes(
    routes: Mapping[str, AdapterKind] = MODEL_ROUTES,
    models: Iterable[ModelDescriptor] = MODELS,
) -> None:
    """Verify the route table covers the registry exactly.

    A mismatch is a programming error, not a caller error.

    Raises:
        AssertionError: If a registered model has no route, a route names an
            unregistered model, or a route's adapter cannot serve the model
    """
    registered = {m.id: m for m in models}

    unrouted = sorted(set(registered) - set(routes))
    if unrouted:
        raise AssertionError(f"Registered models without an adapter route: {unrouted}")

    unknown = sorted(set(routes) - set(registered))
    if unknown:
        raise AssertionError(f"Adapter routes for unregistered models: {unknown}")

    for model_id, kind in routes.items():
        model = registered[model_id]
        if ADAPTER_SIGNATURES[kind] != (model.provider, model.category):
            raise AssertionError(
                f"Route {model_id} -> {kind.value} does not match "
                f"{model.provider.value}/{model.category.value}"
            )


def build_adapter(kind: AdapterKind, settings: Settings, client: httpx.AsyncClient | None = None) -> ProviderAdapter:
    """Create the adapter for a route from settings."""
    common: dict[str, Any] = {"timeout": settings.timeout, "client": client}

    if kind == AdapterKind.OPENAI_CHAT:
        return create_adapter(
            "openai",
            base_url=settings.openai_base_url,
            reasoning_effort=settings.reasoning_effort,
            **common,
        )
    if kind == AdapterKind.GEMINI:
        return create_adapter(
            "gemini",
            base_url=settings.gemini_base_url,
            thinking_budget=settings.gemini_thinking_budget,
            **common,
        )
    if kind == AdapterKind.ANTHROPIC:
        return create_adapter(
            "anthropic",
            base_url=settings.anthropic_base_url,
            api_version=settings.anthropic_version,
            max_tokens=settings.max_tokens,
            thinking_budget=settings.anthropic_thinking_budget,
            **common,
        )
    if kind == AdapterKind.OPENAI_IMAGE:
        return create_adapter(
            "image",
            base_url=settings.openai_base_url,
            model="dall-e-3",
            size=settings.image_size,
            **common,
        )
    if kind == AdapterKind.NANO_BANANA:
        return create_adapter(
            "nano-banana",
            base_url=settings.nano_banana_base_url,
            model=settings.nano_banana_model,
            size=settings.image_size,
            **common,
        )
    raise AssertionError(f"No adapter builder for {kind}")


class Dispatcher:
    """Single router from a request's model id to its adapter.

    Adapters for routes not supplied by the caller are built from settings
    and share one HTTP client owned by the dispatcher.

    Usage:
        async with Dispatcher(credentials=store) as dispatcher:
            response = await dispatcher.dispatch(request)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        credentials: CredentialStore | None = None,
        adapters: Mapping[AdapterKind, ProviderAdapter] | None = None,
        http_client: httpx.AsyncClient | None = None,
        routes: Mapping[str, AdapterKind] = MODEL_ROUTES,
    ):
        """Initialize the dispatcher.

        Args:
            settings: Adapter configuration (default: Settings())
            credentials: Store used to fill requests that carry no API key
            adapters: Pre-built adapters by route, e.g. fakes in tests
            http_client: HTTP client for adapters built here
            routes: Model id -> adapter route table

        Raises:
            AssertionError: If the route table does not match the registry
        """
        check_routes(routes)

        self._settings = settings or Settings()
        self._credentials = credentials
        self._routes = dict(routes)
        self._adapters: dict[AdapterKind, ProviderAdapter] = dict(adapters or {})

        missing = [kind for kind in AdapterKind if kind not in self._adapters]
        self._owns_client = http_client is None and bool(missing)
        self._http_client = http_client
        if self._owns_client:
            self._http_client = httpx.AsyncClient(timeout=self._settings.timeout)
        for kind in missing:
            self._adapters[kind] = build_adapter(kind, self._settings, self._http_client)

    @property
    def settings(self) -> Settings:
        return self._settings

    def adapter_for(self, model_id: str) -> ProviderAdapter:
        """Return the adapter serving a model.

        Raises:
            ModelNotRegistered: If the id is unknown
        """
        model = resolve(model_id)
        return self._adapters[self._routes[model.id]]

    async def dispatch(self, request: ChatRequest) -> ChatResponse:
        """Send a request to the adapter for its model.

        Args:
            request: Provider-agnostic chat request

        Returns:
            The adapter's normalized response

        Raises:
            ModelNotRegistered: If the model is unknown (no network call is made)
            MissingCredential: If no API key is available for the provider
            ProviderError: If the vendor rejects the request
            TransportFailure: If the vendor cannot be reached
        """
        model = resolve(request.model)
        adapter = self._adapters[self._routes[model.id]]

        if not request.api_key and self._credentials is not None:
            request = request.model_copy(update={"api_key": self._credentials.get(model.provider)})

        logger.debug("Dispatching %s to %s", model.id, type(adapter).__name__)
        return await adapter.invoke(request)

    async def close(self) -> None:
        """Close the shared HTTP client if the dispatcher created it."""
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()

    async def __aenter__(self) -> "Dispatcher":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
