"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access the paste storage, service instances and the request clock.
"""

from typing import Optional

from fastapi import Depends, Header

from app.core.clock import resolve_current_time_ms
from app.core.config import settings
from app.services.paste import PasteService
from app.storage import PasteStorage, get_storage


def get_paste_storage() -> PasteStorage:
    """Get the shared paste storage."""
    return get_storage()


def get_base_url() -> str:
    """Get the base URL for shareable paste links."""
    return settings.BASE_URL


async def get_paste_service(
    storage: PasteStorage = Depends(get_paste_storage),
    base_url: str = Depends(get_base_url),
) -> PasteService:
    """Get an instance of the paste service."""
    return PasteService(storage=storage, base_url=base_url)


def get_current_time_ms(
    x_test_now_ms: Optional[str] = Header(None, include_in_schema=False),
) -> int:
    """Current time in ms; the x-test-now-ms header wins in TEST_MODE."""
    return resolve_current_time_ms(x_test_now_ms)
