"""Core module for the pastebin application."""

from app.core.config import settings

__all__ = ["settings"]
