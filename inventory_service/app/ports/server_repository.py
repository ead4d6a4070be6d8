"""Port: server record persistence. Absence is None, never an exception."""
from __future__ import annotations

from typing import Protocol

from inventory_service.app.domain.models import Server, ServerDraft


class ServerRepository(Protocol):
    async def get_by_id(self, server_id: str) -> Server | None: ...

    async def list_all(self) -> list[Server]: ...

    async def insert(self, draft: ServerDraft) -> Server: ...

    async def update(self, server_id: str, patch: ServerDraft) -> Server | None: ...

    async def delete(self, server_id: str) -> None: ...
