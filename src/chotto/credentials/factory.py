"""Factory for creating credential stores."""

from typing import Any

from .base import CredentialStore


def create_credential_store(
    backend: str = "memory",
    **kwargs: Any
) -> CredentialStore:
    """Create a credential store.

    Args:
        backend: Backend type ("memory" or "file")
        **kwargs: Backend-specific configuration
            For memory:
                - secrets: Mapping of provider to secret
            For file:
                - path: JSON file location (required)

    Returns:
        CredentialStore instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryCredentialStore
        return InMemoryCredentialStore(**kwargs)

    elif backend == "file":
        from .file import FileCredentialStore
        return FileCredentialStore(**kwargs)

    raise ValueError(
        f"Unsupported credential backend: {backend}. "
        f"Supported backends: memory, file"
    )
