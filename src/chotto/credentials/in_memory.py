"""In-memory credential store.

Secrets live in a dict and are lost when the process exits.
Suitable for tests and single-session use.
"""

from collections.abc import Mapping

from ..llm.models import Provider
from .base import CredentialStore


class InMemoryCredentialStore(CredentialStore):
    """Dict-backed credential store (session-only)."""

    def __init__(self, secrets: Mapping[Provider | str, str] | None = None):
        self._values: dict[str, str] = {}
        for provider, secret in (secrets or {}).items():
            self.set(provider, secret)

    def _read(self, key: str) -> str | None:
        return self._values.get(key)

    def _write(self, key: str, value: str) -> None:
        self._values[key] = value

    def _delete(self, key: str) -> None:
        self._values.pop(key, None)

    @property
    def backend_type(self) -> str:
        return "memory"
