"""ServerRepository over any KeyValueStore.

Records live in the inventory bucket nested under the root bucket, keyed by id.
Every call opens its own transaction and re-reads the stored bytes.
"""
from __future__ import annotations

import uuid
from typing import Any

from inventory_service.app.core.errors import BucketNotFound
from inventory_service.app.domain.models import Server, ServerDraft
from inventory_service.app.infrastructure.persistence.codec import ServerCodec
from inventory_service.app.ports.key_value_store import KeyValueStore
from inventory_service.app.ports.server_repository import ServerRepository


class BucketServerRepository(ServerRepository):
    def __init__(
        self,
        store: KeyValueStore,
        *,
        root_bucket: str,
        inventory_bucket: str,
        codec: ServerCodec | None = None,
    ) -> None:
        self._store = store
        self._root_bucket = root_bucket
        self._inventory_bucket = inventory_bucket
        self._codec = codec or ServerCodec()

    async def _inventory(self, tx: Any) -> Any:
        root = await tx.bucket(self._root_bucket)
        inventory = await root.bucket(self._inventory_bucket) if root is not None else None
        if inventory is None:
            raise BucketNotFound(f"bucket not found: {self._root_bucket}/{self._inventory_bucket}")
        return inventory

    async def get_by_id(self, server_id: str) -> Server | None:
        async with self._store.read_transaction() as tx:
            data = await (await self._inventory(tx)).get(server_id)
            if data is None:
                return None
            return self._codec.decode(data)

    async def list_all(self) -> list[Server]:
        async with self._store.read_transaction() as tx:
            inventory = await self._inventory(tx)
            return self._codec.decode_all([value async for _, value in inventory.cursor()])

    async def insert(self, draft: ServerDraft) -> Server:
        server = Server.from_draft(str(uuid.uuid4()), draft)
        data = self._codec.encode(server)
        async with self._store.write_transaction() as tx:
            await (await self._inventory(tx)).put(server.id, data)
        return server

    async def update(self, server_id: str, patch: ServerDraft) -> Server | None:
        async with self._store.write_transaction() as tx:
            inventory = await self._inventory(tx)
            data = await inventory.get(server_id)
            if data is None:
                return None
            merged = self._codec.decode(data).merged_with(patch)
            await inventory.put(merged.id, self._codec.encode(merged))
            return merged

    async def delete(self, server_id: str) -> None:
        async with self._store.write_transaction() as tx:
            await (await self._inventory(tx)).delete(server_id)
