"""Redis cache-aside store for read-heavy fleet queries."""
import json
import logging
from typing import Any, Optional
import redis.asyncio as redis
from app.config import settings

logger = logging.getLogger(__name__)

KEY_NAMESPACE = "fleet"


class RedisCache:
    """JSON values in Redis with per-key TTL.

    Keys are readable, e.g. ``fleet:last_position:42``. Redis errors are
    logged and behave like a miss; callers always fall back to the database.
    """

    def __init__(self, client: Optional[redis.Redis] = None, enabled: Optional[bool] = None):
        self._redis: Optional[redis.Redis] = client
        self._enabled = settings.REDIS_CACHE_ENABLED if enabled is None else enabled

        if self._enabled and self._redis is None:
            try:
                self._redis = redis.from_url(
                    settings.get_redis_cache_url(),
                    encoding="utf-8",
                    decode_responses=True,
                    socket_timeout=settings.REDIS_SOCKET_TIMEOUT_SECONDS,
                )
                logger.info(f"Redis cache initialized: {settings.REDIS_CACHE_HOST}:{settings.REDIS_CACHE_PORT}/{settings.REDIS_CACHE_DB}")
            except Exception as e:
                logger.error(f"Failed to initialize Redis cache: {e}")
                self._enabled = False

    @property
    def enabled(self) -> bool:
        return self._enabled and self._redis is not None

    @staticmethod
    def key_for(prefix: str, *parts: Any) -> str:
        return ":".join([KEY_NAMESPACE, prefix, *(str(p) for p in parts)])

    async def get(self, key: str) -> Optional[Any]:
        """Decoded value, or None on a miss."""
        if not self.enabled:
            return None

        try:
            raw = await self._redis.get(key)
        except Exception as e:
            logger.warning(f"Cache get error for {key}: {e}")
            return None
        return json.loads(raw) if raw else None

    async def set(self, key: str, value: Any, ttl_seconds: int):
        if not self.enabled:
            return

        try:
            await self._redis.setex(key, ttl_seconds, json.dumps(value))
        except Exception as e:
            logger.warning(f"Cache set error for {key}: {e}")

    async def delete(self, *keys: str):
        if not self.enabled or not keys:
            return

        try:
            await self._redis.delete(*keys)
        except Exception as e:
            logger.warning(f"Cache delete error for {', '.join(keys)}: {e}")

    async def ping(self) -> bool:
        """Round-trip to Redis; raises if unreachable."""
        if not self.enabled:
            return False
        return bool(await self._redis.ping())

    async def close(self):
        if self._redis:
            await self._redis.aclose()
            logger.info("Redis cache connection closed")


# Global cache instance
_cache: Optional[RedisCache] = None


def get_cache() -> RedisCache:
    """Get the global cache instance."""
    global _cache
    if _cache is None:
        _cache = RedisCache()
    return _cache


async def close_cache():
    """Close the global cache instance."""
    global _cache
    if _cache:
        await _cache.close()
        _cache = None
