"""Redis backed key/value persistence"""
import json
import logging
from typing import Any, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class RedisKeyValueStore:
    """Async Redis store for JSON encoded scalars and payloads"""

    def __init__(self, redis_url: str):
        self._redis_url = redis_url
        self._redis: Optional[aioredis.Redis] = None

    async def get_client(self) -> aioredis.Redis:
        """Get or create Redis client"""
        if self._redis is None:
            self._redis = await aioredis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True
            )
        return self._redis

    async def load(self, key: str) -> Optional[Any]:
        """
        Load a value

        Args:
            key: Storage key

        Returns:
            Decoded value, or None if absent or unreadable
        """
        try:
            client = await self.get_client()
            raw = await client.get(key)
        except RedisError as e:
            logger.error(f"Redis GET error for key {key}: {e}")
            return None

        if raw is None:
            return None

        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding non-JSON value stored under {key}")
            return None

    async def save(self, key: str, value: Any, expire: Optional[int] = None):
        """
        Save a value

        Args:
            key: Storage key
            value: JSON-serializable value
            expire: Optional expiration time in seconds

        Raises:
            RedisError: If the write fails
        """
        try:
            client = await self.get_client()
            await client.set(key, json.dumps(value), ex=expire)
        except RedisError as e:
            logger.error(f"Redis SET error for key {key}: {e}")
            raise

    async def delete(self, key: str):
        """Delete key from store"""
        try:
            client = await self.get_client()
            await client.delete(key)
        except RedisError as e:
            logger.error(f"Redis DELETE error for key {key}: {e}")

    async def close(self):
        """Close Redis connection"""
        if self._redis:
            await self._redis.close()
            self._redis = None
