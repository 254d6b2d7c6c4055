"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from snack_club.api.admin import router as admin_router
from snack_club.api.catalog import router as catalog_router
from snack_club.api.errors import register_error_handlers
from snack_club.api.member import router as member_router
from snack_club.api.snack_requests import router as snack_requests_router
from snack_club.api.subscriptions import router as subscriptions_router
from snack_club.app_logging import configure_logging
from snack_club.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Snack club API starting: environment=%s", container.settings.environment
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    register_error_handlers(app)
    app.include_router(member_router)
    app.include_router(snack_requests_router)
    app.include_router(subscriptions_router)
    app.include_router(catalog_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
