import asyncio
from typing import Any

import psycopg

from illustrator.config.settings import Settings
from illustrator.logging.logger import Log
from illustrator.storage.base import BaseKeyValueStore
from illustrator.storage.exceptions import StorageWriteError

TABLE_NAME = "keyval"


def build_conninfo(settings: Settings) -> str:
    return (
        f"host={settings.db_host} "
        f"port={settings.db_port} "
        f"dbname={settings.db_database} "
        f"user={settings.db_username} "
        f"password={settings.db_password}"
    )


class PostgresKeyValueStore(BaseKeyValueStore):
    """Key-value store kept in a PostgreSQL ``keyval`` table.

    One autocommit connection is opened on first use and reused; every
    statement is a single atomic upsert, select or delete.
    """

    def __init__(self, conninfo: str) -> None:
        self._conninfo = conninfo
        self._conn: psycopg.AsyncConnection[Any] | None = None
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> str | None:
        try:
            conn = await self._connection()
            cur = await conn.execute(f"SELECT value FROM {TABLE_NAME} WHERE key = %s", (key,))
            row = await cur.fetchone()
        except Exception as exc:
            Log.warning(f"Storage read failed, treating as absent: {exc}", key=key)
            return None
        return None if row is None else row[0]

    async def set(self, key: str, value: str) -> None:
        try:
            conn = await self._connection()
            await conn.execute(
                f"""
                INSERT INTO {TABLE_NAME} (key, value) VALUES (%s, %s)
                ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value
                """,
                (key, value),
            )
        except Exception as exc:
            Log.error(f"Storage write failed: {exc}", key=key)
            raise StorageWriteError(f"Failed to write '{key}': {exc}") from exc

    async def remove(self, key: str) -> None:
        try:
            conn = await self._connection()
            await conn.execute(f"DELETE FROM {TABLE_NAME} WHERE key = %s", (key,))
        except Exception as exc:
            Log.error(f"Storage remove failed: {exc}", key=key)
            raise StorageWriteError(f"Failed to remove '{key}': {exc}") from exc

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    async def _connection(self) -> psycopg.AsyncConnection[Any]:
        if self._conn is not None:
            return self._conn
        async with self._lock:
            if self._conn is None:
                conn = await psycopg.AsyncConnection.connect(self._conninfo, autocommit=True)
                await conn.execute(
                    f"CREATE TABLE IF NOT EXISTS {TABLE_NAME} "
                    "(key TEXT PRIMARY KEY, value TEXT NOT NULL)"
                )
                self._conn = conn
                Log.info("Opened PostgreSQL key-value connection")
        return self._conn
