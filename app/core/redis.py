"""
Redis client management module.

This module provides a process-wide Redis client manager used by the
Redis paste storage backend.
"""

from typing import Optional

import redis.asyncio as redis
from loguru import logger
from redis.asyncio.connection import ConnectionPool
from redis.exceptions import RedisError

from app.core.config import settings


class RedisClientManager:
    """
    Async Redis client manager.

    The connection pool and client are created on first use and then
    reused for the lifetime of the process.
    """

    _instance: Optional["RedisClientManager"] = None
    _connection_pool: Optional[ConnectionPool] = None
    _client: Optional[redis.Redis] = None

    def __new__(cls):
        """Singleton pattern to ensure only one Redis client manager exists."""
        if cls._instance is None:
            cls._instance = super(RedisClientManager, cls).__new__(cls)
        return cls._instance

    def _initialize(self) -> None:
        """Create the Redis connection pool."""
        self._connection_pool = redis.ConnectionPool.from_url(
            settings.REDIS_URI,
            max_connections=20,
            decode_responses=True
        )
        logger.debug(f"Redis connection pool created for {settings.REDIS_HOST}:{settings.REDIS_PORT}")

    async def get_client(self) -> redis.Redis:
        """
        Get the shared Redis client, creating it on first use.

        Returns:
            redis.Redis: Redis client instance
        """
        if self._client is None:
            if self._connection_pool is None:
                self._initialize()
            self._client = redis.Redis(connection_pool=self._connection_pool)

        return self._client

    async def ping(self) -> bool:
        """
        Test the Redis connection with a ping command.

        Returns:
            bool: True if successful, False otherwise
        """
        try:
            client = await self.get_client()
            return bool(await client.ping())
        except RedisError as e:
            logger.error(f"Redis ping failed: {str(e)}")
            return False

    async def close(self) -> None:
        """Close the Redis client and connection pool."""
        if self._client:
            await self._client.aclose()
            self._client = None

        if self._connection_pool:
            await self._connection_pool.disconnect()
            self._connection_pool = None

        logger.debug("Redis connections closed")


# Singleton instance
redis_manager = RedisClientManager()
