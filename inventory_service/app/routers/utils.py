from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from loguru import logger

from inventory_service.app.core import SERVICE_NAME
from inventory_service.app.core.errors import InventoryError, NotFound, RecordValidationError
from inventory_service.app.ports.server_repository import ServerRepository
from inventory_service.app.schemas.inventory import ErrorResponse

READINESS_PING_TIMEOUT_DEFAULT = 5.0


def readiness_ping_timeout_seconds(request: Request) -> float:
    """Read readiness DB ping timeout from app.state.settings or default."""
    settings = getattr(request.app.state, "settings", None)
    if settings is not None:
        return getattr(settings, "readiness_ping_timeout_seconds", READINESS_PING_TIMEOUT_DEFAULT)
    return READINESS_PING_TIMEOUT_DEFAULT


def server_repository(request: Request) -> ServerRepository | None:
    return getattr(request.app.state, "server_repository", None)


def error_response(status_code: int, error: str | dict[str, str]) -> Response:
    return Response(
        status_code=status_code,
        media_type="application/json",
        content=ErrorResponse(error=error).model_dump_json(),
    )


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).warning("")


def response_from_error(error: InventoryError, **context: Any) -> Response:
    """
    Map an inventory exception to an HTTP response.

    - NotFound -> 404 (normal outcome, logged at info)
    - RecordValidationError -> 409 with the field -> message mapping
    - anything else (CorruptRecord, EncodingError, StorageError) -> 500
    """
    if isinstance(error, NotFound):
        logger.bind(service_name=SERVICE_NAME, event="not_found", **context).info("")
        return error_response(404, str(error))
    if isinstance(error, RecordValidationError):
        _log("validation_failed", errors=error.errors, **context)
        return error_response(409, error.errors)
    logger.bind(
        service_name=SERVICE_NAME,
        event="inventory_error",
        error_type=type(error).__name__,
        error=str(error),
        **context,
    ).error("")
    return error_response(500, str(error))


def _describe_request_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "invalid request body"


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    _log("bad_request", path=request.url.path)
    return error_response(400, _describe_request_errors(exc))


def install_error_handlers(app: FastAPI) -> None:
    """Unparseable or mistyped JSON bodies answer 400 instead of FastAPI's default 422."""
    app.add_exception_handler(RequestValidationError, _request_validation_handler)


__all__ = [
    "readiness_ping_timeout_seconds",
    "server_repository",
    "error_response",
    "response_from_error",
    "install_error_handlers",
]
