"""Key/value storage for persisted bridge configuration.

Values are anything JSON can represent. Contexts namespace the keys, e.g. all bridge records live
in the ``bridges`` context next to its ``version`` and ``ids`` keys.
"""

import json
from logging import getLogger
from pathlib import Path
from typing import Any, Protocol

import aiosqlite

from matterhub.exceptions import StorageNotInitializedError

LOGGER = getLogger(__name__)


class StorageContext(Protocol):
    name: str

    async def get(self, key: str, default: Any = None) -> Any: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def keys(self) -> list[str]: ...


class MemoryStorage:
    """Storage that lives only as long as the process, used in tests and dry runs."""

    _data: dict[str, dict[str, str]]

    def __init__(self) -> None:
        self._data = {}

    def context(self, name: str) -> "MemoryStorageContext":
        return MemoryStorageContext(name, self._data.setdefault(name, {}))


class MemoryStorageContext:
    name: str
    _values: dict[str, str]

    def __init__(self, name: str, values: dict[str, str]) -> None:
        self.name = name
        self._values = values

    async def get(self, key: str, default: Any = None) -> Any:
        if key not in self._values:
            return default
        # values are stored serialized so callers never share mutable state with the store
        return json.loads(self._values[key])

    async def set(self, key: str, value: Any) -> None:
        self._values[key] = json.dumps(value)

    async def delete(self, key: str) -> None:
        self._values.pop(key, None)

    async def keys(self) -> list[str]:
        return sorted(self._values)


class SqliteStorage:
    """SQLite backed storage, one table shared by every context."""

    path: Path
    """Path of the database file."""

    _db: aiosqlite.Connection | None

    def __init__(self, path: Path) -> None:
        self.path = path
        self._db = None

    @property
    def db(self) -> aiosqlite.Connection:
        """Return the active database connection.

        Raises:
            StorageNotInitializedError: If the database connection is not open.
        """
        if self._db is None:
            raise StorageNotInitializedError("Database connection is not initialized")
        return self._db

    async def open(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        LOGGER.debug("Opening storage at %s", self.path)
        self._db = await aiosqlite.connect(self.path)
        await self._db.execute(
            """
            CREATE TABLE IF NOT EXISTS storage (
                context     TEXT    NOT NULL,
                key         TEXT    NOT NULL,
                value       TEXT    NOT NULL,
                PRIMARY KEY (context, key)
            )
            """
        )
        await self._db.commit()

    async def close(self) -> None:
        if self._db is not None:
            await self._db.close()
            self._db = None

    async def __aenter__(self) -> "SqliteStorage":
        await self.open()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    def context(self, name: str) -> "SqliteStorageContext":
        return SqliteStorageContext(name, self)


class SqliteStorageContext:
    name: str
    _storage: SqliteStorage

    def __init__(self, name: str, storage: SqliteStorage) -> None:
        self.name = name
        self._storage = storage

    async def get(self, key: str, default: Any = None) -> Any:
        async with self._storage.db.execute(
            "SELECT value FROM storage WHERE context = ? AND key = ?", (self.name, key)
        ) as cursor:
            row = await cursor.fetchone()
        if row is None:
            return default
        return json.loads(row[0])

    async def set(self, key: str, value: Any) -> None:
        await self._storage.db.execute(
            """
            INSERT INTO storage (context, key, value) VALUES (?, ?, ?)
            ON CONFLICT (context, key) DO UPDATE SET value = excluded.value
            """,
            (self.name, key, json.dumps(value)),
        )
        await self._storage.db.commit()

    async def delete(self, key: str) -> None:
        await self._storage.db.execute("DELETE FROM storage WHERE context = ? AND key = ?", (self.name, key))
        await self._storage.db.commit()

    async def keys(self) -> list[str]:
        async with self._storage.db.execute(
            "SELECT key FROM storage WHERE context = ? ORDER BY key", (self.name,)
        ) as cursor:
            rows = await cursor.fetchall()
        return [row[0] for row in rows]
