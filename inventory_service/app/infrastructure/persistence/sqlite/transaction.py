"""Bucket and transaction views over an aiosqlite connection.

Buckets form a tree addressed by path ("DB/INV"); each bucket holds byte keys
mapped to byte values. A `Transaction` wraps one connection that already has an
open SQLite transaction; committing or rolling back is the store's job.
"""
from __future__ import annotations

from typing import Any, AsyncIterator

import aiosqlite

from inventory_service.app.core.errors import StorageError
from inventory_service.app.infrastructure.persistence.sqlite.constants import BUCKET_PATH_SEPARATOR


def _as_key(key: str | bytes) -> bytes:
    return key.encode("utf-8") if isinstance(key, str) else bytes(key)


def child_path(parent: str | None, name: str) -> str:
    if not name or BUCKET_PATH_SEPARATOR in name:
        raise ValueError(f"invalid bucket name: {name!r}")
    return name if parent is None else f"{parent}{BUCKET_PATH_SEPARATOR}{name}"


class Transaction:
    def __init__(self, conn: aiosqlite.Connection, *, writable: bool) -> None:
        self._conn = conn
        self._writable = writable

    @property
    def writable(self) -> bool:
        return self._writable

    async def bucket(self, name: str) -> Bucket | None:
        """Return the top-level bucket `name`, or None if it does not exist."""
        return await self.bucket_at(child_path(None, name))

    async def create_bucket_if_not_exists(self, name: str) -> Bucket:
        return await self.create_bucket_at(child_path(None, name))

    async def bucket_at(self, path: str) -> Bucket | None:
        row = await self.fetchone("SELECT 1 FROM buckets WHERE path = ?", (path,))
        return Bucket(self, path) if row is not None else None

    async def create_bucket_at(self, path: str) -> Bucket:
        self.require_writable()
        await self.execute("INSERT OR IGNORE INTO buckets (path) VALUES (?)", (path,))
        return Bucket(self, path)

    def require_writable(self) -> None:
        if not self._writable:
            raise StorageError("transaction is read-only")

    async def execute(self, sql: str, params: tuple[Any, ...] = ()) -> None:
        try:
            cursor = await self._conn.execute(sql, params)
            await cursor.close()
        except aiosqlite.Error as e:
            raise StorageError(f"store operation failed: {e}") from e

    async def fetchone(self, sql: str, params: tuple[Any, ...] = ()) -> Any:
        try:
            async with self._conn.execute(sql, params) as cursor:
                return await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageError(f"store operation failed: {e}") from e

    async def iterate(self, sql: str, params: tuple[Any, ...] = ()) -> AsyncIterator[Any]:
        try:
            async with self._conn.execute(sql, params) as cursor:
                async for row in cursor:
                    yield row
        except aiosqlite.Error as e:
            raise StorageError(f"store operation failed: {e}") from e


class Bucket:
    def __init__(self, tx: Transaction, path: str) -> None:
        self._tx = tx
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    async def bucket(self, name: str) -> Bucket | None:
        """Return the nested bucket `name`, or None if it does not exist."""
        return await self._tx.bucket_at(child_path(self._path, name))

    async def create_bucket_if_not_exists(self, name: str) -> Bucket:
        return await self._tx.create_bucket_at(child_path(self._path, name))

    async def get(self, key: str | bytes) -> bytes | None:
        row = await self._tx.fetchone(
            "SELECT value FROM entries WHERE bucket = ? AND key = ?",
            (self._path, _as_key(key)),
        )
        return bytes(row[0]) if row is not None else None

    async def put(self, key: str | bytes, value: bytes) -> None:
        self._tx.require_writable()
        await self._tx.execute(
            "INSERT OR REPLACE INTO entries (bucket, key, value) VALUES (?, ?, ?)",
            (self._path, _as_key(key), bytes(value)),
        )

    async def delete(self, key: str | bytes) -> None:
        """Remove `key`; deleting a missing key is not an error."""
        self._tx.require_writable()
        await self._tx.execute(
            "DELETE FROM entries WHERE bucket = ? AND key = ?",
            (self._path, _as_key(key)),
        )

    async def cursor(self) -> AsyncIterator[tuple[bytes, bytes]]:
        """Yield (key, value) pairs in ascending byte order of key."""
        rows = self._tx.iterate(
            "SELECT key, value FROM entries WHERE bucket = ? ORDER BY key",
            (self._path,),
        )
        async for key, value in rows:
            yield bytes(key), bytes(value)
