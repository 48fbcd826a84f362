"""API package for the pastebin application.

This package contains the API layer components including routes,
request/response schemas, HTML pages and dependency providers.
"""

from app.api.routes import api_router

__all__ = ["api_router"]
