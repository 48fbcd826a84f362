"""SQL database paste storage built on the paste repository."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.db.base import (
    DatabaseHealthCheck,
    dispose_engine,
    get_session,
    get_session_factory,
    init_db,
)
from app.db.session import SessionManager
from app.models.paste import Paste
from app.repositories.paste_repository import PasteRepository
from app.storage.base import PasteStorage, PasteFields

logger = logging.getLogger(__name__)


class DatabasePasteStorage(PasteStorage):
    """
    Paste storage persisted through SQLAlchemy.

    Each operation runs in its own transaction. Records leave this class as
    detached copies so no caller ever holds a live ORM instance.
    """

    name = "database"

    def __init__(
        self,
        engine: Optional[AsyncEngine] = None,
        paste_repository: Optional[PasteRepository] = None,
    ):
        """
        Args:
            engine: Engine to use instead of the process-wide one
            paste_repository: Repository for paste data access
        """
        self.engine = engine
        self.paste_repository = paste_repository or PasteRepository()
        self._session_factory: Optional[async_sessionmaker] = None
        if engine is not None:
            self._session_factory = async_sessionmaker(
                bind=engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )

    @property
    def session_factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            self._session_factory = get_session_factory()
        return self._session_factory

    async def initialize(self) -> None:
        """Create the pastes table if needed."""
        await init_db(self.engine)

    async def _fetch(self, paste_id: str) -> Optional[Paste]:
        async with get_session(self.session_factory) as db:
            entity = await self.paste_repository.get_by_id(db, paste_id)
            return self._detach(entity)

    async def _insert(self, paste: Paste) -> Paste:
        async with SessionManager.transaction_context(self.session_factory) as db:
            entity = await self.paste_repository.create_paste(db, paste)
            return self._detach(entity)

    async def _id_taken(self, paste_id: str) -> bool:
        async with get_session(self.session_factory) as db:
            return await self.paste_repository.check_id_exists(db, paste_id)

    async def _increment_views(self, paste_id: str) -> Optional[Paste]:
        async with SessionManager.transaction_context(self.session_factory) as db:
            if not await self.paste_repository.increment_view_count(db, paste_id):
                return None
            entity = await self.paste_repository.get_by_id(db, paste_id)
            return self._detach(entity)

    async def update_paste(self, paste_id: str, fields: PasteFields) -> Optional[Paste]:
        async with SessionManager.transaction_context(self.session_factory) as db:
            entity = await self.paste_repository.get_by_id(db, paste_id)
            if entity is None:
                return None
            changes = self._merge(entity, fields)
            updated = await self.paste_repository.update(db, paste_id, changes)
            return self._detach(updated)

    async def delete_paste(self, paste_id: str) -> bool:
        async with SessionManager.transaction_context(self.session_factory) as db:
            deleted = await self.paste_repository.delete(db, paste_id)
        if deleted:
            logger.info(f"Paste {paste_id} deleted")
        return deleted

    async def ping(self) -> bool:
        result = await DatabaseHealthCheck.check_connection(self.session_factory)
        return result["status"] == "healthy"

    async def close(self) -> None:
        # An engine passed in is owned by the caller
        if self.engine is None:
            await dispose_engine()
            self._session_factory = None

    @staticmethod
    def _detach(entity: Optional[Paste]) -> Optional[Paste]:
        if entity is None:
            return None
        return Paste(**entity.to_record())
