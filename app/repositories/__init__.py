"""Repository layer for the pastebin application.

This module provides repository classes that abstract database operations
and implement the Repository pattern for clean separation of concerns.
"""

from app.repositories.base import (
    BaseRepository,
    RepositoryError,
    InvalidUpdateError,
    DuplicateEntityError
)
from app.repositories.paste_repository import PasteRepository

__all__ = [
    # Base classes and exceptions
    "BaseRepository",
    "RepositoryError",
    "InvalidUpdateError",
    "DuplicateEntityError",

    # Concrete repositories
    "PasteRepository",
]
