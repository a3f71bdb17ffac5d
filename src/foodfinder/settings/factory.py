"""Factory for creating settings backends."""

from typing import Any

from .base import SettingsStore


def create_settings_store(
    backend: str = "sqlite",
    **kwargs: Any
) -> SettingsStore:
    """Create a settings backend.

    Args:
        backend: Backend type ("memory" or "sqlite")
        **kwargs: Backend-specific configuration
            For sqlite:
                - path: str | Path (default: ~/.foodfinder/settings.db)
            For memory:
                - initial: dict (default: empty)

    Returns:
        SettingsStore instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemorySettingsStore
        return InMemorySettingsStore(**kwargs)

    elif backend == "sqlite":
        from .sqlite import SQLiteSettingsStore
        return SQLiteSettingsStore(**kwargs)

    raise ValueError(
        f"Unsupported settings backend: {backend}. "
        f"Supported backends: memory, sqlite"
    )
