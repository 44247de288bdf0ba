"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sprintsync import __version__
from sprintsync.api.dependencies import close_services, init_services
from sprintsync.api.models import APIResponse
from sprintsync.api.routes import health, webhook
from sprintsync.config import load_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sprintsync.config import Settings

logger = logging.getLogger("sprintsync.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    settings = app.state.settings if app.state.settings is not None else load_settings()
    init_services(settings)
    logger.info(
        "SprintSync ready (tracker=%s, strategy=%s)",
        settings.tracker.base_url,
        settings.tracker.strategy,
    )

    yield
    # Shutdown
    close_services()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration to run with. Loaded from the environment at
                  startup when omitted.
    """
    app = FastAPI(
        title="SprintSync",
        description="Jira webhook receiver that keeps task dates in step with sprints",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings

    # Exception handlers
    @app.exception_handler(RequestValidationError)
    async def invalid_payload_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Webhook senders get a 200 even for payloads we cannot read
        logger.warning("Unreadable payload on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=APIResponse[None](data=None, error="Invalid webhook payload").model_dump(),
        )

    # Include routers
    app.include_router(webhook.router)
    app.include_router(health.router)

    return app


# Default app instance
app = create_app()
