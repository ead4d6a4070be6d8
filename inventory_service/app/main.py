from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI
from loguru import logger

from inventory_service.app.composition import create_app_dependencies
from inventory_service.app.config.settings import Settings
from inventory_service.app.core import SERVICE_NAME
from inventory_service.app.routers.health import health_router
from inventory_service.app.routers.inventory import inventory_router
from inventory_service.app.routers.utils import install_error_handlers


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API. Settings are read from the environment at startup unless given."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _log("api_starting")
        dependencies = create_app_dependencies(settings)
        try:
            await dependencies.connect()
        except Exception as e:
            logger.exception("store connect failed: {}", e)
            raise

        app.state.settings = dependencies.settings
        app.state.store = dependencies.store
        app.state.server_repository = dependencies.server_repository
        try:
            yield
        finally:
            _log("api_stopping")
            await dependencies.close()

    app = FastAPI(
        title="Server Inventory API",
        version="0.1.0",
        lifespan=lifespan,
    )
    install_error_handlers(app)
    app.include_router(health_router)
    app.include_router(inventory_router)
    return app


app = create_app()


def main() -> None:
    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
