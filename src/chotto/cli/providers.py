"""Factory functions for CLI.

Centralizes creation of settings, the credential store and the dispatcher.
Hides configuration details from command implementations.
"""

from ..config import Settings
from ..credentials import CredentialStore, create_credential_store
from ..dispatcher import Dispatcher


def get_settings() -> Settings:
    """Create settings from CHOTTO_* environment variables."""
    return Settings.from_env()


def get_credential_store(settings: Settings) -> CredentialStore:
    """Create the file credential store at the configured path.

    Environment variables:
        CHOTTO_CREDENTIALS_PATH: Credential file (default: ~/.config/chotto/credentials.json)
    """
    return create_credential_store("file", path=settings.credentials_path)


def get_dispatcher(settings: Settings) -> Dispatcher:
    """Create a dispatcher that reads API keys from the credential store."""
    return Dispatcher(settings=settings, credentials=get_credential_store(settings))
