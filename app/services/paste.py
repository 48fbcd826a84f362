"""Paste service for the pastebin application.

This module contains the PasteService class which implements business logic
for paste creation and viewing on top of a paste storage backend.
"""

import logging
from typing import Any, Optional

from app.core.clock import format_timestamp_ms
from app.core.config import settings
from app.models.paste import Paste, PasteView, normalize_limit
from app.repositories.base import RepositoryError
from app.services.exceptions import (
    PasteCreationError,
    PasteNotFoundError,
    PasteValidationError,
)
from app.storage.base import PasteStorage

logger = logging.getLogger(__name__)


class PasteService:
    """
    Service for paste business logic.

    This service validates new pastes, allocates them in storage, and turns a
    read into a counted view with the remaining-view and expiry figures that
    go back to the reader.
    """

    def __init__(self, storage: PasteStorage, base_url: Optional[str] = None):
        """
        Initialize the paste service.

        Args:
            storage: Paste storage backend
            base_url: Public base URL for share links, defaults to BASE_URL
        """
        self.storage = storage
        self.base_url = (base_url or settings.BASE_URL).rstrip("/")

    async def create_paste(
        self,
        content: Any,
        ttl_seconds: Any = None,
        max_views: Any = None,
    ) -> Paste:
        """
        Create a paste with optional expiry policies.

        Args:
            content: Text of the paste, must not be blank
            ttl_seconds: Optional time-to-live in seconds, integer (or integral float) >= 1
            max_views: Optional view limit, integer >= 1

        Returns:
            Paste: The stored paste

        Raises:
            PasteValidationError: If any argument is invalid
            PasteCreationError: If the storage backend fails
        """
        self._validate_content(content)
        ttl_seconds = self._validate_limit("ttl_seconds", ttl_seconds)
        max_views = self._validate_limit("max_views", max_views)

        try:
            return await self.storage.create_paste(
                content=content,
                ttl_seconds=ttl_seconds,
                max_views=max_views,
            )
        except RepositoryError as e:
            logger.error(f"Error creating paste: {e}")
            raise PasteCreationError(f"Failed to create paste: {str(e)}") from e

    async def view_paste(self, paste_id: str, current_time_ms: Optional[int] = None) -> PasteView:
        """
        Retrieve a paste and count the view.

        Args:
            paste_id: Unique paste identifier
            current_time_ms: Time to evaluate expiry at, defaults to now

        Returns:
            PasteView: Content plus the views left after this one and the
            absolute expiry time, each None when the policy is not set

        Raises:
            PasteNotFoundError: If the paste is absent or expired
        """
        paste = await self.storage.register_view(paste_id, current_time_ms)
        if paste is None:
            raise PasteNotFoundError(f"Paste '{paste_id}' not found")

        expires_at_ms = paste.expires_at_ms()
        return PasteView(
            id=paste.id,
            content=paste.content,
            remaining_views=paste.remaining_views(),
            expires_at=format_timestamp_ms(expires_at_ms) if expires_at_ms is not None else None,
        )

    def build_url(self, paste_id: str) -> str:
        """Shareable page URL for a paste."""
        return f"{self.base_url}/p/{paste_id}"

    def _validate_content(self, content: Any) -> None:
        if not isinstance(content, str) or not content.strip():
            raise PasteValidationError("content is required and must be a non-empty string")

    def _validate_limit(self, name: str, value: Any) -> Optional[int]:
        if value is None:
            return None
        try:
            return normalize_limit(name, value)
        except ValueError as e:
            raise PasteValidationError(str(e)) from e
