from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query, Request, Response
from loguru import logger
from pydantic import BaseModel

from inventory_service.app.constants import ResponseMessage
from inventory_service.app.core import SERVICE_NAME
from inventory_service.app.core.errors import InventoryError
from inventory_service.app.routers.utils import error_response, response_from_error, server_repository
from inventory_service.app.schemas.inventory import ServerListResponse, ServerRequest, ServerResponse
from inventory_service.app.services import inventory as inventory_use_cases
from inventory_service.app.services.inventory_export import dump_ansible_inventory


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def _json(model: BaseModel, status_code: int = 200) -> Response:
    return Response(status_code=status_code, media_type="application/json", content=model.model_dump_json())


def _unavailable() -> Response:
    return error_response(503, ResponseMessage.DATABASE_UNAVAILABLE)


inventory_router = APIRouter(prefix="/inventory", tags=["Inventory"])


@inventory_router.get(
    "",
    summary="List all servers",
    description="Returns every stored server in key order. With `format=yaml` the inventory is rendered as an Ansible YAML inventory grouped by tag.",
    responses={
        200: {"description": "Servers returned (JSON) or Ansible inventory (YAML)."},
        404: {"description": "The inventory is empty."},
        500: {"description": "Store or decode failure."},
    },
)
async def list_inventory(request: Request, output_format: str | None = Query(None, alias="format")) -> Response:
    repo = server_repository(request)
    if repo is None:
        return _unavailable()
    try:
        servers = await inventory_use_cases.list_servers(repo)
    except InventoryError as e:
        return response_from_error(e, operation="list")

    if output_format == "yaml":
        return Response(status_code=200, media_type="application/x-yaml", content=dump_ansible_inventory(servers))
    return _json(ServerListResponse(data=servers))


@inventory_router.get(
    "/{server_id}",
    summary="Get a server",
    responses={
        200: {"description": "Server returned."},
        404: {"description": "No server with this id."},
        500: {"description": "Store or decode failure."},
    },
)
async def get_server(request: Request, server_id: str) -> Response:
    repo = server_repository(request)
    if repo is None:
        return _unavailable()
    try:
        server = await inventory_use_cases.get_server(server_id, repo)
    except InventoryError as e:
        return response_from_error(e, operation="get", server_id=server_id)
    return _json(ServerResponse(data=server))


@inventory_router.post(
    "",
    summary="Add a server",
    description="Stores a new server and assigns its id. ip, fqdn and at least one tag are required; ip must be a valid IPv4 or IPv6 address.",
    responses={
        200: {"description": "Server stored; body carries the assigned id."},
        400: {"description": "Body is not valid JSON or has wrong field types."},
        409: {"description": "Field validation failed."},
        500: {"description": "Store failure."},
    },
)
async def add_server(request: Request, body: ServerRequest) -> Response:
    repo = server_repository(request)
    if repo is None:
        return _unavailable()
    try:
        server = await inventory_use_cases.create_server(body.to_draft(), repo)
    except InventoryError as e:
        return response_from_error(e, operation="create")
    _log("server_created", server_id=server.id, fqdn=server.fqdn)
    return _json(ServerResponse(data=server))


@inventory_router.put(
    "/{server_id}",
    summary="Update a server",
    description="Merges the supplied non-empty fields into the stored server. Tags are replaced only when the new list has a different length.",
    responses={
        200: {"description": "Merged server returned."},
        400: {"description": "Body is not valid JSON or has wrong field types."},
        404: {"description": "No server with this id."},
        409: {"description": "Supplied ip is invalid."},
        500: {"description": "Store or decode failure."},
    },
)
async def update_server(request: Request, server_id: str, body: ServerRequest) -> Response:
    repo = server_repository(request)
    if repo is None:
        return _unavailable()
    try:
        server = await inventory_use_cases.update_server(server_id, body.to_draft(), repo)
    except InventoryError as e:
        return response_from_error(e, operation="update", server_id=server_id)
    _log("server_updated", server_id=server.id)
    return _json(ServerResponse(data=server))


@inventory_router.delete(
    "/{server_id}",
    summary="Delete a server",
    description="Removes the server if present. Deleting an unknown id also succeeds.",
    status_code=202,
    responses={
        202: {"description": "Deleted (or never existed)."},
        500: {"description": "Store failure."},
    },
)
async def delete_server(request: Request, server_id: str) -> Response:
    repo = server_repository(request)
    if repo is None:
        return _unavailable()
    try:
        await inventory_use_cases.delete_server(server_id, repo)
    except InventoryError as e:
        return response_from_error(e, operation="delete", server_id=server_id)
    _log("server_deleted", server_id=server_id)
    return Response(status_code=202)
