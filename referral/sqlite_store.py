"""SQLite-backed KeyValueStore (aiosqlite)."""

import time
from pathlib import Path

import aiosqlite

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at REAL NOT NULL
);
"""


class SqliteStore:
    """Key-value table in a single SQLite file. Connection opened lazily."""

    def __init__(self, db_path: Path, namespace: str = "") -> None:
        self._db_path = db_path
        self._namespace = (namespace or "").strip()
        self._conn: aiosqlite.Connection | None = None

    def _ns(self, key: str) -> str:
        return f"{self._namespace}:{key}" if self._namespace else key

    async def _ensure_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = await aiosqlite.connect(str(self._db_path))
            await self._conn.execute("PRAGMA journal_mode=WAL")
            await self._conn.execute("PRAGMA synchronous=NORMAL")
            await self._conn.executescript(_SCHEMA)
            await self._conn.commit()
        return self._conn

    async def close(self) -> None:
        if self._conn:
            await self._conn.close()
            self._conn = None

    async def get(self, key: str) -> str | None:
        conn = await self._ensure_conn()
        cursor = await conn.execute(
            "SELECT value FROM kv WHERE key = ?", (self._ns(key.strip()),)
        )
        row = await cursor.fetchone()
        return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        conn = await self._ensure_conn()
        await conn.execute(
            """
            INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                updated_at = excluded.updated_at
            """,
            (self._ns(key.strip()), value, time.time()),
        )
        await conn.commit()

    async def remove(self, key: str) -> None:
        conn = await self._ensure_conn()
        await conn.execute("DELETE FROM kv WHERE key = ?", (self._ns(key.strip()),))
        await conn.commit()
