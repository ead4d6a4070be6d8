from __future__ import annotations

import asyncio
import uuid
from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio
from fastapi import FastAPI

from inventory_service.app.config.settings import Settings
from inventory_service.app.domain.models import Server, ServerDraft
from inventory_service.app.infrastructure.persistence.bucket_server_repository import BucketServerRepository
from inventory_service.app.infrastructure.persistence.sqlite.sqlite_store import SqliteStore
from inventory_service.app.routers.health import health_router
from inventory_service.app.routers.inventory import inventory_router
from inventory_service.app.routers.utils import install_error_handlers


class FakeStore:
    """Implements KeyValueStore for readiness tests. Transactions are not needed by the routers."""

    def __init__(self, ping_ok: bool = True, *, ping_delay: float = 0.0, location: str = "fake.db") -> None:
        self._ping_ok = ping_ok
        self._ping_delay = ping_delay
        self._location = location
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def location(self) -> str:
        return self._location

    async def connect(self) -> None:
        self._ready = True

    async def ping(self) -> bool:
        if self._ping_delay:
            await asyncio.sleep(self._ping_delay)
        return self._ping_ok

    async def close(self) -> None:
        self._ready = False


class FakeServerRepository:
    """Implements ServerRepository in memory; merges with the same rules as the real store."""

    def __init__(
        self,
        servers: list[Server] | None = None,
        *,
        raise_on_call: Exception | None = None,
    ) -> None:
        self._servers = {s.id: s for s in servers or []}
        self._raise_on_call = raise_on_call

    def _maybe_raise(self) -> None:
        if self._raise_on_call is not None:
            raise self._raise_on_call

    async def get_by_id(self, server_id: str) -> Server | None:
        self._maybe_raise()
        return self._servers.get(server_id)

    async def list_all(self) -> list[Server]:
        self._maybe_raise()
        return [self._servers[k] for k in sorted(self._servers)]

    async def insert(self, draft: ServerDraft) -> Server:
        self._maybe_raise()
        server = Server.from_draft(str(uuid.uuid4()), draft)
        self._servers[server.id] = server
        return server

    async def update(self, server_id: str, patch: ServerDraft) -> Server | None:
        self._maybe_raise()
        current = self._servers.get(server_id)
        if current is None:
            return None
        merged = current.merged_with(patch)
        self._servers[server_id] = merged
        return merged

    async def delete(self, server_id: str) -> None:
        self._maybe_raise()
        self._servers.pop(server_id, None)


def make_settings(db_path: Path | str, **overrides) -> Settings:
    values = {
        "DATABASE_URL": str(db_path),
        "INITIAL_BACKOFF_SECONDS": 0.01,
        "MAX_BACKOFF_SECONDS": 0.02,
        "MAX_CONNECTION_ATTEMPTS": 2,
    }
    values.update(overrides)
    return Settings(**values)


def build_app(*, store, repository, settings: Settings | None = None) -> FastAPI:
    app = FastAPI()
    app.state.store = store
    app.state.server_repository = repository
    if settings is not None:
        app.state.settings = settings
    install_error_handlers(app)
    app.include_router(health_router)
    app.include_router(inventory_router)
    return app


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path / "inventory.db")


@pytest_asyncio.fixture()
async def store(settings: Settings) -> AsyncIterator[SqliteStore]:
    sqlite_store = SqliteStore(settings.database_url, settings)
    await sqlite_store.connect()
    yield sqlite_store
    await sqlite_store.close()


@pytest_asyncio.fixture()
async def repository(store: SqliteStore) -> BucketServerRepository:
    return BucketServerRepository(store, root_bucket="DB", inventory_bucket="INV")


@pytest.fixture()
def test_app() -> FastAPI:
    return build_app(store=FakeStore(), repository=FakeServerRepository())
