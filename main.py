"""
FastAPI application for a collaboration center gateway.
Decides per request whether this gateway is the origin, a relay or the
destination of a multi-hop route and delivers or forwards accordingly.
"""
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
import logging

from collabgate import __version__
from collabgate.api.routes import health, local
from collabgate.core.config import Settings, settings
from collabgate.core.logging import setup_logging
from collabgate.core.middleware import (
    CollaborationForwardMiddleware,
    RequestIDMiddleware,
    SessionLoginMiddleware,
)
from collabgate.services.client_factory import ClientFactory

# Configure logging
setup_logging()
logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build a gateway application.

    Args:
        app_settings: Settings to use (default: environment settings)
        transport: Optional httpx transport for all outbound calls
    """
    app_settings = app_settings or settings
    client_factory = ClientFactory(app_settings, transport=transport)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await client_factory.aclose()

    app = FastAPI(
        title="Collaboration Center Gateway",
        description="Multi-hop routing gateway between collaboration centers",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.client_factory = client_factory

    # Middleware (last added runs first): request id -> routing -> login
    if app_settings.login_enabled:
        app.add_middleware(SessionLoginMiddleware, client_factory=client_factory)
    app.add_middleware(CollaborationForwardMiddleware, client_factory=client_factory)
    app.add_middleware(RequestIDMiddleware)

    # Include routers
    app.include_router(health.router)
    if app_settings.LOCAL_SERVICE_URL:
        app.include_router(local.router)

    logger.info(
        f"Gateway configured: agent={app_settings.COCO_AGENT_URL}, "
        f"forward_mode={app_settings.FORWARD_MODE}, "
        f"on_missing_destination={app_settings.ON_MISSING_DESTINATION}"
    )
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, workers=1)
