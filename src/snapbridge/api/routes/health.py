"""Health check endpoints."""

from fastapi import APIRouter, Request

from snapbridge import __version__
from snapbridge.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "snapbridge"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with configuration and wallet info."""
    settings = get_settings()
    session = request.app.state.session
    return {
        "status": "healthy",
        "service": "snapbridge",
        "version": __version__,
        "gateway": session.gateway.name,
        "config": settings.get_safe_dict(),
    }
