"""Abstract base class for credential stores.

This module defines the interface for API key storage.
The abstraction hides:
- Persistence mechanism (memory, file)
- Key namespacing
"""

from abc import ABC, abstractmethod

from ..llm.models import Provider

KEY_PREFIX = "chotto-gpt-api-key-"


class CredentialStore(ABC):
    """Key-value store of one secret per provider.

    Secrets are trimmed on write; writing a blank secret removes it.
    Lookups of unknown providers return an empty string.
    """

    @staticmethod
    def storage_key(provider: Provider | str) -> str:
        """Namespaced key under which a provider's secret is kept.

        Raises:
            ValueError: If the provider is not a known provider id
        """
        return f"{KEY_PREFIX}{Provider(provider).value}"

    def get(self, provider: Provider | str) -> str:
        """Return the provider's secret, or an empty string if none is set."""
        return self._read(self.storage_key(provider)) or ""

    def set(self, provider: Provider | str, secret: str) -> None:
        """Store (or with a blank secret, remove) the provider's secret."""
        key = self.storage_key(provider)
        secret = secret.strip()
        if secret:
            self._write(key, secret)
        else:
            self._delete(key)

    def has(self, provider: Provider | str) -> bool:
        """Check whether a secret is set for the provider."""
        return len(self.get(provider)) > 0

    @abstractmethod
    def _read(self, key: str) -> str | None:
        """Read a raw value by namespaced key."""

    @abstractmethod
    def _write(self, key: str, value: str) -> None:
        """Write a raw value by namespaced key."""

    @abstractmethod
    def _delete(self, key: str) -> None:
        """Delete a namespaced key if present."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
