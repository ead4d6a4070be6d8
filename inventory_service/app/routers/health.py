"""Liveness and readiness checks for the inventory store."""
from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, Request, Response
from loguru import logger
from pydantic import BaseModel

from inventory_service.app.core import SERVICE_NAME
from inventory_service.app.routers.utils import readiness_ping_timeout_seconds

health_router = APIRouter(prefix="/health", tags=["Health"])


class ReadinessResponse(BaseModel):
    status: str
    store: str | None = None
    reason: str | None = None


def _not_ready(reason: str, store: str | None = None) -> Response:
    logger.bind(service_name=SERVICE_NAME, event="store_not_ready", reason=reason, store=store).warning("")
    return Response(
        status_code=503,
        media_type="application/json",
        content=ReadinessResponse(status="not_ready", store=store, reason=reason).model_dump_json(),
    )


@health_router.get("/live", summary="Liveness check")
async def live() -> dict[str, Any]:
    return {"status": "ok"}


@health_router.get(
    "/ready",
    summary="Readiness check",
    description="200 once the store is open and its inventory bucket answers within READINESS_PING_TIMEOUT_SECONDS.",
    responses={
        200: {"description": "Store ready."},
        503: {"description": "Store not opened, inventory bucket missing, or ping timed out."},
    },
)
async def ready(request: Request) -> Response:
    store = getattr(request.app.state, "store", None)
    if store is None:
        return _not_ready("store_not_initialized")

    try:
        ok = await asyncio.wait_for(store.ping(), timeout=readiness_ping_timeout_seconds(request))
    except asyncio.TimeoutError:
        return _not_ready("ping_timeout", store.location)
    if not ok:
        return _not_ready("ping_failed", store.location)
    return Response(
        status_code=200,
        media_type="application/json",
        content=ReadinessResponse(status="ready", store=store.location).model_dump_json(),
    )
