"""
Redis-backed content cache.
"""
import json
from typing import Optional

import redis.asyncio as redis
from pydantic import ValidationError as PydanticValidationError
from redis.exceptions import RedisError

from app.core.exceptions import StorageError
from app.core.logging import get_logger
from app.domain.schemas.presentation import PresentationData
from app.infrastructure.cache.base import CacheStore

logger = get_logger(__name__)


class RedisCacheStore(CacheStore):
    """
    Content cache kept in Redis under ``<prefix>:<key>``.

    Keys are written without expiry.
    """

    def __init__(self, client: redis.Redis, prefix: str = "deckgen:content"):
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str, prefix: str = "deckgen:content") -> "RedisCacheStore":
        pool = redis.ConnectionPool.from_url(
            url,
            decode_responses=True,
            max_connections=50,
        )
        return cls(redis.Redis(connection_pool=pool), prefix=prefix)

    def _make_key(self, key: str) -> str:
        """
        Create prefixed cache key.

        Args:
            key: Cache key

        Returns:
            Prefixed key
        """
        return f"{self.prefix}:{key}"

    async def get(self, key: str) -> Optional[PresentationData]:
        try:
            value = await self.client.get(self._make_key(key))
            if not value:
                return None
            return PresentationData.model_validate(json.loads(value))
        except (RedisError, json.JSONDecodeError, PydanticValidationError) as e:
            logger.error("redis_get_error", key=key, error=str(e))
            return None

    async def put(self, key: str, data: PresentationData) -> None:
        serialized = json.dumps(data.to_cache_payload(), ensure_ascii=False)
        try:
            await self.client.set(self._make_key(key), serialized)
        except RedisError as e:
            raise StorageError(f"Redis set failed for {key}: {e}", operation="put") from e

    async def close(self) -> None:
        await self.client.aclose()
