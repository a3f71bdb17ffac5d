"""SQLite settings backend.

Provides persistent key-value storage using a SQLite database.
Uses aiosqlite for async access; values are stored as JSON text.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import aiosqlite

from .base import SettingsStore

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".foodfinder" / "settings.db"


class SQLiteSettingsStore(SettingsStore):
    """SQLite-backed settings store.

    Stores settings in a single ``settings`` table keyed by name.
    Connects lazily on first access if ``connect()`` was not called.
    """

    def __init__(self, path: str | Path = DEFAULT_SETTINGS_PATH):
        self._db_path = Path(path).expanduser()
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Initialize database connection and schema."""
        if self._connection is not None:
            return
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._db_path)
        await self._create_schema()
        logger.debug("Settings database opened at %s", self._db_path)

    async def _create_schema(self) -> None:
        """Create database tables."""
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def get(self, key: str, default: Any = None) -> Any:
        await self.connect()
        async with self._connection.execute(
            "SELECT value FROM settings WHERE key = ?",
            (key,)
        ) as cursor:
            row = await cursor.fetchone()

        if row is None:
            return default
        return json.loads(row[0])

    async def set(self, key: str, value: Any) -> None:
        await self.connect()
        await self._connection.execute("""
            INSERT INTO settings (key, value, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
        """, (key, json.dumps(value), datetime.now().isoformat()))
        await self._connection.commit()

    async def delete(self, key: str) -> None:
        await self.connect()
        await self._connection.execute("DELETE FROM settings WHERE key = ?", (key,))
        await self._connection.commit()

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
