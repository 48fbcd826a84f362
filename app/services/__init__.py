"""Service layer for the pastebin application.

This package contains service classes implementing the business logic of the application.
Services orchestrate interactions between storage and the API layer.
"""

from app.services.paste import PasteService

__all__ = ["PasteService"]
