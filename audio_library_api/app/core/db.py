"""
SQLite storage for audio entries.

``AudioStore`` owns a single SQLite connection for its whole lifetime.
The connection is created, used and closed on one dedicated worker
thread, and every public method is a coroutine that runs exactly one
SQL statement on that worker.  Handlers therefore never block the
event loop while waiting for the database, and each statement is
atomic on its own.  Sequences of statements are not.

The ``audio`` table is created on ``open`` if it does not exist yet.
All ``sqlite3.Error`` exceptions are re-raised as ``StorageFailure``.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, TypeVar

from .errors import StorageFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS audio (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT,
    genre TEXT,
    image_file BLOB,
    audio_file BLOB
)
"""

SELECT_COLUMNS = "id, title, genre, image_file, audio_file"

# Columns that may be changed after creation, in the order they are
# written by ``update``.  ``audio_file`` is never updated.
UPDATABLE_COLUMNS = ("image_file", "title", "genre")


class AudioStore:
    """Asynchronous facade over the ``audio`` table."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    async def open(self) -> None:
        """Connect to the database and create the schema."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="audio-store")
        try:
            self._conn = await self._run(self._connect)
        except StorageFailure:
            self._executor.shutdown(wait=True)
            self._executor = None
            raise
        logger.info("Opened audio store at %s", self.db_path)

    async def close(self) -> None:
        """Close the connection and stop the worker thread."""
        if self._executor is None:
            return
        conn, self._conn = self._conn, None
        if conn is not None:
            await self._run(conn.close)
        self._executor.shutdown(wait=True)
        self._executor = None
        logger.info("Closed audio store at %s", self.db_path)

    async def __aenter__(self) -> "AudioStore":
        await self.open()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def fetch_all(self) -> List[Dict[str, Any]]:
        """Return every row in store-native order."""

        def query(conn: sqlite3.Connection) -> List[Dict[str, Any]]:
            rows = conn.execute(f"SELECT {SELECT_COLUMNS} FROM audio").fetchall()
            return [dict(row) for row in rows]

        return await self._execute(query)

    async def fetch_one(self, audio_id: int) -> Optional[Dict[str, Any]]:
        """Return the row with ``audio_id`` or ``None``."""

        def query(conn: sqlite3.Connection) -> Optional[Dict[str, Any]]:
            row = conn.execute(
                f"SELECT {SELECT_COLUMNS} FROM audio WHERE id = ?",
                (audio_id,),
            ).fetchone()
            return dict(row) if row is not None else None

        return await self._execute(query)

    async def insert(self, title: str, genre: str, audio_file: bytes, image_file: bytes) -> int:
        """Insert a new row and return the identifier assigned by SQLite."""

        def query(conn: sqlite3.Connection) -> int:
            cursor = conn.execute(
                "INSERT INTO audio (title, genre, audio_file, image_file) VALUES (?, ?, ?, ?)",
                (title, genre, sqlite3.Binary(audio_file), sqlite3.Binary(image_file)),
            )
            conn.commit()
            return cursor.lastrowid

        return await self._execute(query)

    async def update(self, audio_id: int, fields: Dict[str, Any]) -> int:
        """Update the given columns of one row and return the affected row count.

        ``fields`` maps column names from ``UPDATABLE_COLUMNS`` to new
        values.  An empty mapping performs no write and returns 0.
        """
        unknown = set(fields) - set(UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Columns cannot be updated: {sorted(unknown)}")
        columns = [column for column in UPDATABLE_COLUMNS if column in fields]
        if not columns:
            return 0
        assignments = ", ".join(f"{column} = ?" for column in columns)
        params = [fields[column] for column in columns] + [audio_id]

        def query(conn: sqlite3.Connection) -> int:
            cursor = conn.execute(f"UPDATE audio SET {assignments} WHERE id = ?", params)
            conn.commit()
            return cursor.rowcount

        return await self._execute(query)

    async def delete(self, audio_id: int) -> int:
        """Delete one row and return the affected row count."""

        def query(conn: sqlite3.Connection) -> int:
            cursor = conn.execute("DELETE FROM audio WHERE id = ?", (audio_id,))
            conn.commit()
            return cursor.rowcount

        return await self._execute(query)

    def _connect(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.db_path)
            # Return rows as dict‑like objects keyed by column name
            conn.row_factory = sqlite3.Row
            conn.executescript(SCHEMA_SQL)
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageFailure(str(exc)) from exc
        return conn

    async def _execute(self, query: Callable[[sqlite3.Connection], T]) -> T:
        conn = self._conn
        if conn is None:
            raise StorageFailure("Audio store is not open")

        def call() -> T:
            try:
                return query(conn)
            except sqlite3.Error as exc:
                raise StorageFailure(str(exc)) from exc

        return await self._run(call)

    async def _run(self, func: Callable[[], T]) -> T:
        if self._executor is None:
            raise StorageFailure("Audio store is not open")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, func)
