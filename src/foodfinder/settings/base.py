"""Abstract base class for settings backends.

This module defines the interface for persisted key-value settings.
The abstraction hides:
- Storage format (SQLite rows, in-process dict)
- Persistence mechanism (file, in-memory)
- Connection management
"""

from abc import ABC, abstractmethod
from typing import Any


class SettingsStore(ABC):
    """Abstract settings backend.

    Values are JSON-compatible scalars. Supports async context manager
    protocol:
        async with store:
            await store.set_bool("flag", True)
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the backend gracefully."""

    @abstractmethod
    async def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for key, or default."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Persist a value for key."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove key if present."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def get_bool(self, key: str, default: bool = False) -> bool:
        """Return the stored value for key coerced to bool."""
        value = await self.get(key, default)
        return bool(value)

    async def set_bool(self, key: str, value: bool) -> None:
        """Persist a boolean flag."""
        await self.set(key, bool(value))

    async def __aenter__(self) -> "SettingsStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.disconnect()
