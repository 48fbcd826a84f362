"""Paste storage engine.

``get_storage()`` hands out one process-wide storage instance for the
backend named by ``settings.STORAGE_BACKEND``.
"""

from typing import Optional

from loguru import logger

from app.core.config import settings, StorageBackend
from app.storage.base import PasteStorage, generate_paste_id
from app.storage.database import DatabasePasteStorage
from app.storage.memory import InMemoryPasteStorage
from app.storage.redis import RedisPasteStorage

_storage: Optional[PasteStorage] = None


def create_storage(backend: StorageBackend) -> PasteStorage:
    """Build a storage instance for ``backend``."""
    if backend == StorageBackend.MEMORY:
        return InMemoryPasteStorage()
    if backend == StorageBackend.REDIS:
        return RedisPasteStorage()
    return DatabasePasteStorage()


def get_storage() -> PasteStorage:
    """Return the shared storage, creating it on first use."""
    global _storage
    if _storage is None:
        _storage = create_storage(settings.STORAGE_BACKEND)
        logger.info(f"Using {_storage.name} paste storage")
    return _storage


async def close_storage() -> None:
    """Close and forget the shared storage."""
    global _storage
    if _storage is not None:
        await _storage.close()
    _storage = None


__all__ = [
    "PasteStorage",
    "InMemoryPasteStorage",
    "DatabasePasteStorage",
    "RedisPasteStorage",
    "create_storage",
    "get_storage",
    "close_storage",
    "generate_paste_id",
]
