"""Paste Repository for the pastebin application.

This module provides the PasteRepository class for database operations related to Paste models.
Following the Repository pattern, it abstracts database interactions for paste storage.
"""

from typing import Any, Dict, Union

from sqlalchemy import update, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.models.paste import Paste, PasteCreate, PasteUpdate
from app.repositories.base import BaseRepository, RepositoryError, DuplicateEntityError


class PasteRepository(BaseRepository[Paste, PasteCreate, PasteUpdate]):
    """
    Repository for Paste model database operations.

    Besides the generic CRUD operations it provides an atomic, guarded
    view counter increment.
    """

    def __init__(self):
        """Initialize the repository with the Paste model type."""
        super().__init__(Paste)

    async def create_paste(self, db: AsyncSession, data: Union[Paste, Dict[str, Any]]) -> Paste:
        """
        Insert a new paste.

        Args:
            db: Database session
            data: Full paste record including id and created_at

        Returns:
            The created Paste entity

        Raises:
            DuplicateEntityError: If the id is already taken
            RepositoryError: On other database errors
        """
        record = data.to_record() if isinstance(data, Paste) else data
        try:
            entity = self.model_type(**record)
            db.add(entity)
            await db.flush()
            return entity
        except IntegrityError as e:
            await db.rollback()
            raise DuplicateEntityError(self.model_type, "id", record.get("id")) from e
        except SQLAlchemyError as e:
            await db.rollback()
            raise RepositoryError(f"Database error creating paste: {e}") from e

    async def check_id_exists(self, db: AsyncSession, paste_id: str) -> bool:
        """Check if a paste id is already in use, expired or not."""
        return await self.exists(db, id=paste_id)

    async def increment_view_count(self, db: AsyncSession, paste_id: str) -> bool:
        """
        Increment the view count for a paste unless its view limit is reached.

        This uses a single conditional UPDATE statement, so two concurrent
        readers can never both consume the last allowed view.

        Args:
            db: Database session
            paste_id: The ID of the Paste to update

        Returns:
            True if a row was incremented, False if the paste is missing or
            already at its view limit

        Raises:
            RepositoryError: On database errors
        """
        try:
            stmt = (
                update(self.model_type)
                .where(
                    self.model_type.id == paste_id,
                    or_(
                        self.model_type.max_views.is_(None),
                        self.model_type.current_views < self.model_type.max_views,
                    ),
                )
                .values(current_views=self.model_type.current_views + 1)
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(stmt)
            return result.rowcount == 1
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error incrementing view count: {e}") from e
