"""Database module for the pastebin application."""
from app.db.base import (
    get_engine,
    get_session_factory,
    get_session,
    init_db,
    dispose_engine,
    DatabaseHealthCheck,
)
from app.db.session import SessionManager

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_session",
    "init_db",
    "dispose_engine",
    "DatabaseHealthCheck",
    "SessionManager",
]
