"""
Data models for the pastebin application.

This module imports and exports all SQLModel models used in the application.
"""

# First import SQLModel itself to ensure metadata is initialized
from sqlmodel import SQLModel

from app.models.paste import (
    Paste,
    PasteBase,
    PasteCreate,
    PasteUpdate,
    PasteView,
)

__all__ = [
    "SQLModel",
    "Paste",
    "PasteBase",
    "PasteCreate",
    "PasteUpdate",
    "PasteView",
]
