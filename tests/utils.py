"""Test utilities for pastebin tests."""

import random
import string
from typing import Any, Dict, Optional

from app.core.clock import now_ms
from app.models.paste import Paste


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_paste_id() -> str:
    """Generate a random id in the paste id alphabet."""
    return ''.join(random.choice(string.ascii_lowercase + string.digits) for _ in range(8))


def create_test_paste_data(
    paste_id: Optional[str] = None,
    content: Optional[str] = None,
    created_at: Optional[int] = None,
    ttl_seconds: Optional[int] = None,
    max_views: Optional[int] = None,
    current_views: int = 0
) -> Dict[str, Any]:
    """Create test data dict for a Paste."""
    return {
        "id": paste_id or random_paste_id(),
        "content": content or random_string(40),
        "created_at": created_at if created_at is not None else now_ms(),
        "ttl_seconds": ttl_seconds,
        "max_views": max_views,
        "current_views": current_views,
    }


async def create_test_paste(db, **kwargs) -> Paste:
    """Create and persist a test Paste in the database."""
    paste = Paste(**create_test_paste_data(**kwargs))
    db.add(paste)
    await db.flush()
    await db.refresh(paste)
    return paste


class MockRedis:
    """In-process stand-in for the subset of the async Redis client the storage uses.

    Values are kept as strings, like a client created with ``decode_responses=True``.
    """

    def __init__(self):
        self.data: Dict[str, Dict[str, str]] = {}
        self.expiry: Dict[str, int] = {}
        self.expire_at: Dict[str, int] = {}

    async def hset(self, key, field=None, value=None, mapping=None):
        hash_ = self.data.setdefault(key, {})
        items = dict(mapping or {})
        if field is not None:
            items[field] = value
        added = 0
        for name, val in items.items():
            if name not in hash_:
                added += 1
            hash_[name] = str(val)
        return added

    async def hgetall(self, key):
        return dict(self.data.get(key, {}))

    async def hincrby(self, key, field, amount=1):
        hash_ = self.data.setdefault(key, {})
        value = int(hash_.get(field, 0)) + amount
        hash_[field] = str(value)
        return value

    async def hdel(self, key, *fields):
        hash_ = self.data.get(key, {})
        removed = 0
        for name in fields:
            if hash_.pop(name, None) is not None:
                removed += 1
        return removed

    async def delete(self, *keys):
        deleted = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                deleted += 1
            self.expiry.pop(key, None)
            self.expire_at.pop(key, None)
        return deleted

    async def exists(self, *keys):
        return sum(1 for key in keys if key in self.data)

    async def expire(self, key, seconds):
        if key not in self.data:
            return False
        self.expiry[key] = seconds
        return True

    async def expireat(self, key, when):
        if key not in self.data:
            return False
        self.expire_at[key] = when
        return True

    async def persist(self, key):
        removed = self.expiry.pop(key, None) is not None
        removed = self.expire_at.pop(key, None) is not None or removed
        return removed

    async def ping(self):
        return True

    async def aclose(self):
        pass
