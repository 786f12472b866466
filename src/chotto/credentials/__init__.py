"""Credential storage for provider API keys.

The dispatch layer only sees the ``CredentialStore`` interface; where and
how secrets are kept is hidden behind it.
"""

from .base import KEY_PREFIX, CredentialStore
from .factory import create_credential_store

__all__ = [
    "KEY_PREFIX",
    "CredentialStore",
    "create_credential_store",
]
