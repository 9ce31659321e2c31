"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from snapbridge import __version__
from snapbridge.config import get_settings
from snapbridge.gateway.factory import get_gateway
from snapbridge.session.operations import SnapSession

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    await app.state.session.refresh()
    yield
    # Shutdown
    await app.state.session.gateway.close()


def create_app(session: Optional[SnapSession] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        session: Session to serve (defaults to one over the configured gateway)
    """
    settings = get_settings()

    app = FastAPI(
        title="Snapbridge API",
        description="Wallet snap bridge and private swap construction",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.session = session or SnapSession(get_gateway(), settings=settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    from snapbridge.api.routes import health, snap

    app.include_router(health.router, tags=["Health"])
    app.include_router(snap.router, tags=["Snap"])

    return app
