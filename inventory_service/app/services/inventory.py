"""
Inventory use cases. Accept plain domain types and the ServerRepository abstraction.

Validation runs before the repository is touched. Absence is raised as NotFound
here so the router can answer 404; the repository itself returns None.
Router translates exceptions to HTTP status codes and content.
"""
from __future__ import annotations

from inventory_service.app.constants import ResponseMessage
from inventory_service.app.core.errors import NotFound, RecordValidationError
from inventory_service.app.domain.models import Server, ServerDraft
from inventory_service.app.ports.server_repository import ServerRepository
from inventory_service.app.services.validation import validate_full, validate_ip_only


async def list_servers(repository: ServerRepository) -> list[Server]:
    servers = await repository.list_all()
    if not servers:
        raise NotFound(ResponseMessage.INVENTORY_EMPTY)
    return servers


async def get_server(server_id: str, repository: ServerRepository) -> Server:
    server = await repository.get_by_id(server_id)
    if server is None:
        raise NotFound(ResponseMessage.SERVER_NOT_FOUND)
    return server


async def create_server(draft: ServerDraft, repository: ServerRepository) -> Server:
    errors = validate_full(draft)
    if errors:
        raise RecordValidationError(errors)
    return await repository.insert(draft)


async def update_server(server_id: str, patch: ServerDraft, repository: ServerRepository) -> Server:
    """Only an ip in the patch is validated; every other field is merged as given."""
    if patch.ip:
        errors = validate_ip_only(patch)
        if errors:
            raise RecordValidationError(errors)
    server = await repository.update(server_id, patch)
    if server is None:
        raise NotFound(ResponseMessage.SERVER_NOT_FOUND)
    return server


async def delete_server(server_id: str, repository: ServerRepository) -> None:
    await repository.delete(server_id)
