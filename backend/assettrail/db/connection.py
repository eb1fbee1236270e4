"""Async SQLite connection wrapper with WAL mode and schema initialization."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite

from assettrail.db.schema import SCHEMA_SQL


class Database:
    """Thin async wrapper around aiosqlite with WAL mode and auto-schema.

    One connection is shared by every caller, so statements are serialized
    through a task-reentrant lock. A task that holds the lock (inside
    ``transaction()``) can keep issuing statements without deadlocking.
    """

    def __init__(self, connection: aiosqlite.Connection) -> None:
        self._conn = connection
        self._lock = asyncio.Lock()
        self._owner: asyncio.Task | None = None
        self._tx_depth = 0

    @classmethod
    async def connect(cls, path: str = "assettrail.db") -> Database:
        """Create a connection with WAL mode, foreign keys, and schema init."""
        conn = await aiosqlite.connect(path)
        conn.row_factory = aiosqlite.Row
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")
        await conn.execute("PRAGMA busy_timeout=5000")
        db = cls(conn)
        await db._ensure_schema()
        return db

    async def _ensure_schema(self) -> None:
        """Create tables if they don't exist. Idempotent."""
        await self._conn.executescript(SCHEMA_SQL)
        await self._conn.commit()

    @asynccontextmanager
    async def _locked(self) -> AsyncIterator[None]:
        task = asyncio.current_task()
        if self._owner is not None and self._owner is task:
            yield
            return
        async with self._lock:
            self._owner = task
            try:
                yield
            finally:
                self._owner = None

    @asynccontextmanager
    async def transaction(self, immediate: bool = False) -> AsyncIterator[Database]:
        """Run the enclosed statements as one all-or-nothing unit.

        ``immediate=True`` takes SQLite's write lock up front (BEGIN IMMEDIATE),
        so a read-then-write sequence cannot race another writer, including
        one in a different process. A deferred transaction gives the enclosed
        reads a single consistent snapshot. Nested calls join the outer
        transaction. Commits on normal exit, rolls back and re-raises otherwise.
        """
        async with self._locked():
            if self._tx_depth:
                self._tx_depth += 1
                try:
                    yield self
                finally:
                    self._tx_depth -= 1
                return

            # The statement runs on aiosqlite's thread even if this task is
            # cancelled while awaiting it, so BEGIN belongs inside the try.
            # rollback() is queued behind it and is a no-op with nothing open.
            self._tx_depth = 1
            try:
                await self._conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
                yield self
            except BaseException:
                self._tx_depth = 0
                await self._conn.rollback()
                raise
            self._tx_depth = 0
            await self._conn.commit()

    @property
    def in_transaction(self) -> bool:
        return self._tx_depth > 0

    async def execute(self, sql: str, params: tuple | None = None) -> aiosqlite.Cursor:
        """Execute a single SQL statement. Commits unless inside ``transaction()``."""
        async with self._locked():
            if self._tx_depth:
                return await self._conn.execute(sql, params or ())
            try:
                cursor = await self._conn.execute(sql, params or ())
                await self._conn.commit()
            except BaseException:
                await self._conn.rollback()
                raise
            return cursor

    async def fetchone(self, sql: str, params: tuple | None = None) -> aiosqlite.Row | None:
        """Execute and return a single row."""
        async with self._locked():
            cursor = await self._conn.execute(sql, params or ())
            return await cursor.fetchone()

    async def fetchall(self, sql: str, params: tuple | None = None) -> list[aiosqlite.Row]:
        """Execute and return all rows."""
        async with self._locked():
            cursor = await self._conn.execute(sql, params or ())
            return list(await cursor.fetchall())

    async def close(self) -> None:
        """Close the database connection."""
        await self._conn.close()
