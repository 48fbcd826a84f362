"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from app.api.routes import health, pages, pastes
from app.core.config import settings

# Create root router
api_router = APIRouter()

# Include paste routes with API prefix
api_router.include_router(
    pastes.router,
    prefix=settings.API_PREFIX
)

# Include health check routes with API prefix
api_router.include_router(
    health.router,
    prefix=settings.API_PREFIX
)

# HTML pages live at the root path so share links read /p/{id}
api_router.include_router(
    pages.router
)

__all__ = ["api_router"]
