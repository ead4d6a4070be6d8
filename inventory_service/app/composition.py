"""
Composition root: single place where concrete implementations are wired.

Builds settings, the key-value store and the server repository; provides the
connect/close lifecycle. Used by lifespan to populate app.state. No DI
container library, explicit wiring only. DATABASE_URL selects the store
through the persistence factory.
"""

from inventory_service.app.config.settings import Settings
from inventory_service.app.ports.key_value_store import KeyValueStore
from inventory_service.app.ports.server_repository import ServerRepository
from inventory_service.app.infrastructure.persistence.factory import (
    create_server_repository,
    create_store,
)


class AppDependencies:
    """Holds wired dependencies and their lifecycle. Built only in composition root."""

    def __init__(
        self,
        *,
        settings: Settings,
        store: KeyValueStore,
        server_repository: ServerRepository,
    ) -> None:
        self._settings = settings
        self._store = store
        self._server_repository = server_repository
        self._store_connected = False

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def server_repository(self) -> ServerRepository:
        return self._server_repository

    async def connect(self) -> None:
        await self._store.connect()
        self._store_connected = True

    async def close(self) -> None:
        if self._store_connected:
            await self._store.close()
            self._store_connected = False


def create_app_dependencies(settings: Settings | None = None) -> AppDependencies:
    """
    Composition root: build all app dependencies in one place.
    Caller owns lifecycle (connect/close).
    """
    _settings = settings or Settings()
    store = create_store(_settings)
    repository = create_server_repository(_settings, store)

    return AppDependencies(
        settings=_settings,
        store=store,
        server_repository=repository,
    )
