"""Storage engine interface for pastes.

Every backend shares the read path defined here, so TTL and view-limit
semantics come from ``Paste.is_expired`` regardless of where the record lives.
"""

import abc
import logging
import random
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from app.core.clock import now_ms
from app.core.config import settings
from app.models.paste import Paste, PasteUpdate
from app.repositories.base import InvalidUpdateError, RepositoryError, to_update_dict

logger = logging.getLogger(__name__)

PasteFields = Union[PasteUpdate, Dict[str, Any]]


def generate_paste_id(length: Optional[int] = None) -> str:
    """
    Generate a random paste id.

    Args:
        length: Length of the id, defaults to PASTE_ID_LENGTH

    Returns:
        str: A random id drawn from PASTE_ID_CHARS
    """
    length = length or settings.PASTE_ID_LENGTH
    return ''.join(random.choice(settings.PASTE_ID_CHARS) for _ in range(length))


class PasteStorage(abc.ABC):
    """
    Storage engine for paste records.

    Subclasses provide persistence primitives; lookup, lazy expiry and view
    registration are implemented once here.
    """

    name = "base"

    @abc.abstractmethod
    async def _fetch(self, paste_id: str) -> Optional[Paste]:
        """Load a record as stored, without any expiry check."""

    @abc.abstractmethod
    async def _insert(self, paste: Paste) -> Paste:
        """Persist a brand new record."""

    @abc.abstractmethod
    async def _id_taken(self, paste_id: str) -> bool:
        """Whether any record, expired or not, is stored under ``paste_id``."""

    @abc.abstractmethod
    async def _increment_views(self, paste_id: str) -> Optional[Paste]:
        """
        Atomically add one view unless the view limit is already reached.

        Returns:
            The record after the increment, or None if it is gone or exhausted
        """

    @abc.abstractmethod
    async def update_paste(self, paste_id: str, fields: PasteFields) -> Optional[Paste]:
        """
        Merge ``fields`` into an existing record.

        No expiry check is made; callers validate freshness with ``get_paste``.

        Returns:
            The updated record, or None if no record exists under ``paste_id``

        Raises:
            InvalidUpdateError: If the fields are malformed or lower ``current_views``
        """

    @abc.abstractmethod
    async def delete_paste(self, paste_id: str) -> bool:
        """Remove a record. Returns whether one existed."""

    @abc.abstractmethod
    async def ping(self) -> bool:
        """Check that the backing medium is reachable."""

    async def initialize(self) -> None:
        """Prepare the backing medium (schema, connections) before first use."""

    async def close(self) -> None:
        """Release backend resources."""

    async def create_paste(
        self,
        content: str,
        ttl_seconds: Optional[int] = None,
        max_views: Optional[int] = None,
    ) -> Paste:
        """
        Create and persist a paste with a fresh id.

        Args:
            content: Text content of the paste
            ttl_seconds: Optional time-to-live in seconds
            max_views: Optional maximum view count

        Returns:
            The stored Paste with ``current_views == 0``

        Raises:
            RepositoryError: If no unused id could be allocated or the backend fails
        """
        paste_id = await self._allocate_id()
        paste = Paste(
            id=paste_id,
            content=content,
            created_at=now_ms(),
            ttl_seconds=ttl_seconds,
            max_views=max_views,
            current_views=0,
        )
        stored = await self._insert(paste)
        logger.info(f"Paste {paste_id} created in {self.name} storage")
        return stored

    async def get_paste(self, paste_id: str, current_time_ms: Optional[int] = None) -> Optional[Paste]:
        """
        Fetch a paste if it exists and has not expired.

        An expired record is deleted before reporting not-found. The view
        counter is left untouched.

        Args:
            paste_id: Unique paste identifier
            current_time_ms: Time to evaluate expiry at, defaults to now

        Returns:
            The Paste, or None if absent or expired
        """
        paste = await self._fetch(paste_id)
        if paste is None:
            return None

        if paste.is_expired(now_ms() if current_time_ms is None else current_time_ms):
            logger.info(f"Paste {paste_id} has expired, deleting")
            await self.delete_paste(paste_id)
            return None

        return paste

    async def register_view(self, paste_id: str, current_time_ms: Optional[int] = None) -> Optional[Paste]:
        """
        Fetch a fresh paste and count one view in the same operation.

        Returns:
            The Paste as it is after this view, or None if absent, expired or
            exhausted by a concurrent reader
        """
        paste = await self.get_paste(paste_id, current_time_ms)
        if paste is None:
            return None

        viewed = await self._increment_views(paste_id)
        if viewed is None:
            logger.info(f"Paste {paste_id} reached its view limit concurrently, deleting")
            await self.delete_paste(paste_id)
            return None

        return viewed

    async def _allocate_id(self) -> str:
        for _ in range(settings.PASTE_ID_MAX_ATTEMPTS):
            candidate = generate_paste_id()
            if not await self._id_taken(candidate):
                return candidate

        raise RepositoryError(
            f"Failed to allocate a unique paste id after {settings.PASTE_ID_MAX_ATTEMPTS} attempts"
        )

    @staticmethod
    def _merge(paste: Paste, fields: PasteFields) -> Dict[str, Any]:
        """
        Validate ``fields`` against ``paste`` and return the values to apply.

        Raises:
            InvalidUpdateError: If a value is malformed or would lower ``current_views``
        """
        try:
            changes = to_update_dict(PasteUpdate(**to_update_dict(fields)))
        except ValidationError as e:
            raise InvalidUpdateError(f"Invalid paste update: {e}") from e
        if "current_views" in changes and changes["current_views"] is None:
            del changes["current_views"]
        new_views = changes.get("current_views")
        if new_views is not None and new_views < paste.current_views:
            raise InvalidUpdateError("current_views cannot decrease")
        return changes
