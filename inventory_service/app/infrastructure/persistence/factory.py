"""Store factory: DATABASE_URL picks the key-value store. Only place that imports concrete stores.

Accepted forms:
- sqlite:///relative/path.db and sqlite:////absolute/path.db (SQLAlchemy-style)
- a bare file path, treated as SQLite
"""
from __future__ import annotations

from inventory_service.app.config.settings import Settings
from inventory_service.app.infrastructure.persistence.bucket_server_repository import BucketServerRepository
from inventory_service.app.infrastructure.persistence.sqlite.sqlite_store import SqliteStore
from inventory_service.app.ports.key_value_store import KeyValueStore
from inventory_service.app.ports.server_repository import ServerRepository

SQLITE_SCHEMES = ("sqlite", "sqlite+aiosqlite")


def sqlite_path_from_url(url: str) -> str:
    scheme, sep, rest = url.strip().partition("://")
    if not sep:
        return url.strip()
    if scheme.lower() not in SQLITE_SCHEMES:
        raise ValueError(f"Unsupported database url scheme: {scheme}")
    if not rest.startswith("/"):
        raise ValueError(f"SQLite url must not name a host: {url}")
    return rest[1:]


def create_store(settings: Settings) -> KeyValueStore:
    return SqliteStore(sqlite_path_from_url(settings.database_url), settings)


def create_server_repository(settings: Settings, store: KeyValueStore) -> ServerRepository:
    """Repository over the inventory bucket named in settings; shares the store used for readiness."""
    return BucketServerRepository(
        store,
        root_bucket=settings.database_root_bucket,
        inventory_bucket=settings.database_inventory_bucket,
    )
