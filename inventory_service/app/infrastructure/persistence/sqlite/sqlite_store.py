from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Awaitable, Callable, TypeVar

import aiosqlite
from loguru import logger

from inventory_service.app.config.settings import Settings
from inventory_service.app.core import SERVICE_NAME
from inventory_service.app.core.backoff import exponential_backoff
from inventory_service.app.core.errors import StorageError
from inventory_service.app.infrastructure.persistence.sqlite.constants import (
    SCHEMA_STATEMENTS,
    ConnectionState,
)
from inventory_service.app.infrastructure.persistence.sqlite.transaction import Transaction, child_path

T = TypeVar("T")


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class SqliteStore:
    """KeyValueStore over one SQLite file, driven through aiosqlite.

    The long-lived handle is opened by connect() and serves ping(). Each
    transaction runs on its own short-lived connection so SQLite's file locking
    decides isolation: writers are serialized by BEGIN IMMEDIATE, readers see a
    WAL snapshot. Busy waits happen on aiosqlite's worker threads, never on the
    event loop.
    """

    def __init__(self, path: str, settings: Settings) -> None:
        if path.strip() in ("", ":memory:"):
            raise ValueError("database path must name a file; in-memory databases are not shared between transactions")
        self._path = path
        self._settings = settings
        self._timeout = settings.database_busy_timeout_ms / 1000
        self._state = ConnectionState.DISCONNECTED
        self._handle: aiosqlite.Connection | None = None

    @property
    def ready(self) -> bool:
        return self._state == ConnectionState.CONNECTED

    @property
    def location(self) -> str:
        return self._path

    @property
    def inventory_path(self) -> str:
        return child_path(
            child_path(None, self._settings.database_root_bucket),
            self._settings.database_inventory_bucket,
        )

    async def connect(self) -> None:
        self._state = ConnectionState.CONNECTING
        backoff = exponential_backoff(
            self._settings.initial_backoff_seconds,
            self._settings.max_backoff_seconds,
            self._settings.backoff_multiplier,
            self._settings.max_connection_attempts,
        )
        try:
            async for attempt, delay in backoff:
                _log("db_connect_attempt", attempt=attempt, delay=delay, path=self._path)
                try:
                    await self._open()
                    self._state = ConnectionState.CONNECTED
                    _log("db_connected", path=self._path)
                    return
                except (aiosqlite.Error, OSError, StorageError) as e:
                    logger.warning("db connect failed: {}", e)
                    if attempt >= self._settings.max_connection_attempts:
                        _log("db_connect_failed", attempt=attempt)
                        raise
        finally:
            if self._state != ConnectionState.CONNECTED:
                self._state = ConnectionState.DISCONNECTED

    async def ping(self) -> bool:
        """True if the handle answers and the inventory bucket exists; False if not connected or any error."""
        if self._handle is None:
            return False
        try:
            async with self._handle.execute(
                "SELECT 1 FROM buckets WHERE path = ?", (self.inventory_path,)
            ) as cursor:
                return await cursor.fetchone() is not None
        except aiosqlite.Error:
            return False

    async def close(self) -> None:
        if self._handle is not None:
            await self._handle.close()
            self._handle = None
        self._state = ConnectionState.DISCONNECTED

    @asynccontextmanager
    async def read_transaction(self) -> AsyncIterator[Transaction]:
        conn = await self._new_transaction_connection()
        try:
            await self._begin(conn, "BEGIN")
            yield Transaction(conn, writable=False)
        finally:
            await conn.rollback()
            await conn.close()

    @asynccontextmanager
    async def write_transaction(self) -> AsyncIterator[Transaction]:
        conn = await self._new_transaction_connection()
        try:
            await self._begin(conn, "BEGIN IMMEDIATE")
            try:
                yield Transaction(conn, writable=True)
            except BaseException:
                await conn.rollback()
                raise
            try:
                await conn.commit()
            except aiosqlite.Error as e:
                await conn.rollback()
                raise StorageError(f"commit failed: {e}") from e
        finally:
            await conn.close()

    async def view(self, fn: Callable[[Transaction], Awaitable[T]]) -> T:
        async with self.read_transaction() as tx:
            return await fn(tx)

    async def update(self, fn: Callable[[Transaction], Awaitable[T]]) -> T:
        async with self.write_transaction() as tx:
            return await fn(tx)

    async def _open(self) -> None:
        Path(self._path).parent.mkdir(parents=True, exist_ok=True)
        handle = await self._connect_file()
        try:
            await handle.execute("PRAGMA journal_mode=WAL")
            for statement in SCHEMA_STATEMENTS:
                await handle.execute(statement)
            self._handle = handle
            await self._ensure_namespace()
        except BaseException:
            self._handle = None
            await handle.close()
            raise

    async def _ensure_namespace(self) -> None:
        """Create the root bucket and the inventory bucket inside it. Safe on every startup."""
        async with self.write_transaction() as tx:
            root = await tx.create_bucket_if_not_exists(self._settings.database_root_bucket)
            await root.create_bucket_if_not_exists(self._settings.database_inventory_bucket)

    async def _connect_file(self) -> aiosqlite.Connection:
        return await aiosqlite.connect(self._path, timeout=self._timeout, isolation_level=None)

    async def _new_transaction_connection(self) -> aiosqlite.Connection:
        if self._handle is None:
            raise StorageError("db_not_connected")
        try:
            return await self._connect_file()
        except aiosqlite.Error as e:
            raise StorageError(f"could not open transaction: {e}") from e

    @staticmethod
    async def _begin(conn: aiosqlite.Connection, statement: str) -> None:
        try:
            await conn.execute(statement)
        except aiosqlite.Error as e:
            raise StorageError(f"could not begin transaction: {e}") from e
