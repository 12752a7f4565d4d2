"""SQLite-backed key-value store.

Uses the stdlib ``sqlite3`` driver. The connection is opened on first use and
cached; every statement runs on one dedicated worker thread, so all
transactions serialize through that single connection without extra locking.
"""

import asyncio
import sqlite3
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

from illustrator.logging.logger import Log
from illustrator.storage.base import BaseKeyValueStore
from illustrator.storage.exceptions import StorageWriteError

TABLE_NAME = "keyval"

T = TypeVar("T")


class SqliteKeyValueStore(BaseKeyValueStore):
    """Persists string values in a single ``keyval`` table of a local database file."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._conn: sqlite3.Connection | None = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="kv-sqlite")
        self._closed = False

    async def get(self, key: str) -> str | None:
        try:
            return await self._run(self._get_sync, key)
        except Exception as exc:
            Log.warning(f"Storage read failed, treating as absent: {exc}", key=key)
            return None

    async def set(self, key: str, value: str) -> None:
        try:
            await self._run(self._set_sync, key, value)
        except Exception as exc:
            Log.error(f"Storage write failed: {exc}", key=key)
            raise StorageWriteError(f"Failed to write '{key}': {exc}") from exc

    async def remove(self, key: str) -> None:
        try:
            await self._run(self._remove_sync, key)
        except Exception as exc:
            Log.error(f"Storage remove failed: {exc}", key=key)
            raise StorageWriteError(f"Failed to remove '{key}': {exc}") from exc

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._run(self._close_sync)
        self._executor.shutdown(wait=True)

    async def _run(self, func: Callable[..., T], *args: object) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, lambda: func(*args))

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self._path))
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute(
                f"CREATE TABLE IF NOT EXISTS {TABLE_NAME} "
                "(key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )
            conn.commit()
            self._conn = conn
            Log.info(f"Opened key-value database {self._path}")
        return self._conn

    def _get_sync(self, key: str) -> str | None:
        row = self._connection().execute(
            f"SELECT value FROM {TABLE_NAME} WHERE key = ?", (key,)
        ).fetchone()
        return None if row is None else row[0]

    def _set_sync(self, key: str, value: str) -> None:
        conn = self._connection()
        with conn:
            conn.execute(
                f"INSERT INTO {TABLE_NAME} (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def _remove_sync(self, key: str) -> None:
        conn = self._connection()
        with conn:
            conn.execute(f"DELETE FROM {TABLE_NAME} WHERE key = ?", (key,))

    def _close_sync(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
