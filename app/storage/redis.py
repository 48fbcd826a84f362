"""Redis paste storage.

Each paste is a hash under ``{REDIS_KEY_PREFIX}{id}``. View counting relies
on HINCRBY, which is atomic per key.
"""

import logging
from functools import wraps
from typing import Any, Dict, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from app.core.config import settings
from app.core.redis import redis_manager
from app.models.paste import Paste
from app.repositories.base import RepositoryError
from app.storage.base import PasteStorage, PasteFields

logger = logging.getLogger(__name__)

# Redis drops the key this long after the TTL, the read path still decides expiry
KEY_EXPIRY_GRACE_SECONDS = 1


def wrap_redis_errors(func):
    """Re-raise Redis failures as RepositoryError."""
    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except RedisError as e:
            logger.error(f"Redis error in {func.__name__}: {e}")
            raise RepositoryError(f"Redis error: {e}") from e
    return wrapper


def _to_hash(paste: Paste) -> Dict[str, Any]:
    mapping = {
        "content": paste.content,
        "created_at": paste.created_at,
        "current_views": paste.current_views,
    }
    if paste.ttl_seconds is not None:
        mapping["ttl_seconds"] = paste.ttl_seconds
    if paste.max_views is not None:
        mapping["max_views"] = paste.max_views
    return mapping


def _from_hash(paste_id: str, data: Dict[str, Any]) -> Optional[Paste]:
    # A hash without content is a leftover counter, not a paste
    if not data or "content" not in data:
        return None
    return Paste(
        id=paste_id,
        content=data["content"],
        created_at=int(data["created_at"]),
        ttl_seconds=int(data["ttl_seconds"]) if data.get("ttl_seconds") is not None else None,
        max_views=int(data["max_views"]) if data.get("max_views") is not None else None,
        current_views=int(data.get("current_views", 0)),
    )


class RedisPasteStorage(PasteStorage):
    """Paste storage backed by Redis hashes."""

    name = "redis"

    def __init__(self, client: Optional[redis.Redis] = None, key_prefix: Optional[str] = None):
        """
        Args:
            client: Redis client to use instead of the shared one
            key_prefix: Key namespace, defaults to REDIS_KEY_PREFIX
        """
        self._client = client
        # Without an explicit client the process-wide manager owns the connection
        self._shared = client is None
        self.key_prefix = key_prefix if key_prefix is not None else settings.REDIS_KEY_PREFIX

    async def get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = await redis_manager.get_client()
        return self._client

    def _key(self, paste_id: str) -> str:
        return f"{self.key_prefix}{paste_id}"

    @wrap_redis_errors
    async def _fetch(self, paste_id: str) -> Optional[Paste]:
        client = await self.get_client()
        data = await client.hgetall(self._key(paste_id))
        return _from_hash(paste_id, data)

    @wrap_redis_errors
    async def _insert(self, paste: Paste) -> Paste:
        client = await self.get_client()
        key = self._key(paste.id)
        await client.hset(key, mapping=_to_hash(paste))
        if paste.ttl_seconds is not None:
            await client.expire(key, paste.ttl_seconds + KEY_EXPIRY_GRACE_SECONDS)
        return paste

    @wrap_redis_errors
    async def _id_taken(self, paste_id: str) -> bool:
        client = await self.get_client()
        return await client.exists(self._key(paste_id)) > 0

    @wrap_redis_errors
    async def _increment_views(self, paste_id: str) -> Optional[Paste]:
        client = await self.get_client()
        views = await client.hincrby(self._key(paste_id), "current_views", 1)

        paste = await self._fetch(paste_id)
        if paste is None:
            # The paste vanished before the increment landed
            await client.delete(self._key(paste_id))
            return None

        if paste.max_views is not None and views > paste.max_views:
            return None

        paste.current_views = views
        return paste

    @wrap_redis_errors
    async def update_paste(self, paste_id: str, fields: PasteFields) -> Optional[Paste]:
        paste = await self._fetch(paste_id)
        if paste is None:
            return None

        changes = self._merge(paste, fields)
        client = await self.get_client()
        key = self._key(paste_id)

        to_set = {name: value for name, value in changes.items() if value is not None}
        to_clear = [name for name, value in changes.items() if value is None]
        if to_set:
            await client.hset(key, mapping=to_set)
        if to_clear:
            await client.hdel(key, *to_clear)

        for name, value in changes.items():
            setattr(paste, name, value)

        if "ttl_seconds" in changes:
            if paste.ttl_seconds is None:
                await client.persist(key)
            else:
                await client.expireat(key, paste.expires_at_ms() // 1000 + KEY_EXPIRY_GRACE_SECONDS)

        return paste

    @wrap_redis_errors
    async def delete_paste(self, paste_id: str) -> bool:
        client = await self.get_client()
        deleted = await client.delete(self._key(paste_id))
        return deleted > 0

    async def ping(self) -> bool:
        if self._shared:
            return await redis_manager.ping()
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.error(f"Redis ping failed: {e}")
            return False

    async def close(self) -> None:
        if self._shared:
            await redis_manager.close()
            self._client = None
