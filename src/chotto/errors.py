"""Exceptions raised by the dispatch layer.

Every failure of a single dispatch is one of these and is recoverable:
callers render it and carry on with the conversation.
"""

import httpx


class ChottoError(Exception):
    """Base class for all chotto errors.

    Attributes:
        message: Human-readable description
        provider: Provider involved, when known
        model: Model id involved, when known
    """

    def __init__(self, message: str, provider: str | None = None, model: str | None = None):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.model = model


class ModelNotRegistered(ChottoError):
    """The requested model id is not in the registry."""

    def __init__(self, model: str):
        super().__init__(f"Unknown model: {model}", model=model)


class MissingCredential(ChottoError):
    """No API key is configured for the model's provider."""

    def __init__(self, provider: str, model: str | None = None):
        super().__init__(f"No API key configured for provider '{provider}'", provider=provider, model=model)


class ProviderError(ChottoError):
    """The vendor answered with a non-success status."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        model: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, provider=provider, model=model)
        self.status_code = status_code


class TransportFailure(ChottoError):
    """The vendor could not be reached."""

    def __init__(
        self,
        error: httpx.HTTPError,
        provider: str | None = None,
        model: str | None = None,
    ):
        super().__init__(str(error) or type(error).__name__, provider=provider, model=model)
        self.error = error


class SessionBusy(ChottoError):
    """A send is already in flight for this session."""

    def __init__(self) -> None:
        super().__init__("A message is already being sent")
