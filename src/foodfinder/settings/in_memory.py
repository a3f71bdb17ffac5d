"""In-memory settings backend.

Simple dict-based storage for session-only settings.
Data is lost when the application exits.
"""

from typing import Any

from .base import SettingsStore


class InMemorySettingsStore(SettingsStore):
    """In-memory settings (session-only).

    Suitable for tests and for running without touching the filesystem.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(initial or {})

    async def connect(self) -> None:
        """Initialize memory (no-op for in-memory)."""
        pass

    async def disconnect(self) -> None:
        """Close memory (no-op for in-memory)."""
        pass

    async def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    async def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    async def delete(self, key: str) -> None:
        self._values.pop(key, None)

    @property
    def backend_type(self) -> str:
        return "memory"
