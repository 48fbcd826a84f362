"""In-memory paste storage, for development and tests."""

from typing import Any, Dict, Optional

from app.models.paste import Paste
from app.storage.base import PasteStorage, PasteFields


class InMemoryPasteStorage(PasteStorage):
    """
    Paste storage backed by a plain dict.

    Records are kept as dicts and handed out as fresh Paste objects, so
    callers cannot mutate stored state. Data does not survive a restart.
    """

    name = "memory"

    def __init__(self):
        self.store: Dict[str, Dict[str, Any]] = {}

    async def _fetch(self, paste_id: str) -> Optional[Paste]:
        record = self.store.get(paste_id)
        if record is None:
            return None
        return Paste(**record)

    async def _insert(self, paste: Paste) -> Paste:
        self.store[paste.id] = paste.to_record()
        return Paste(**self.store[paste.id])

    async def _id_taken(self, paste_id: str) -> bool:
        return paste_id in self.store

    async def _increment_views(self, paste_id: str) -> Optional[Paste]:
        # No await between the check and the write, so this is atomic on the event loop
        record = self.store.get(paste_id)
        if record is None:
            return None
        if record["max_views"] is not None and record["current_views"] >= record["max_views"]:
            return None
        record["current_views"] += 1
        return Paste(**record)

    async def update_paste(self, paste_id: str, fields: PasteFields) -> Optional[Paste]:
        record = self.store.get(paste_id)
        if record is None:
            return None
        record.update(self._merge(Paste(**record), fields))
        return Paste(**record)

    async def delete_paste(self, paste_id: str) -> bool:
        return self.store.pop(paste_id, None) is not None

    async def ping(self) -> bool:
        return True
