"""
Redis cache for read-heavy content (chapter list, quiz questions)
"""
import redis
import json
import logging
from typing import Optional, Any
from app.config import settings

logger = logging.getLogger(__name__)

CHAPTERS_KEY = "content:chapters"


def quiz_questions_key(quiz_id: int) -> str:
    return f"content:quiz:{quiz_id}:questions"


class CacheService:
    """
    Redis-backed cache

    Any Redis failure degrades to a cache miss; the database stays the
    source of truth.
    """

    def __init__(self, url: str, enabled: bool = True):
        self.redis_client = None

        if not enabled:
            logger.info("Caching disabled by configuration")
            return

        try:
            client = redis.from_url(
                url,
                decode_responses=True,
                socket_connect_timeout=2
            )
            client.ping()
            self.redis_client = client
            logger.info("Redis connection established")
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {str(e)}. Caching disabled.")

    @property
    def enabled(self) -> bool:
        return self.redis_client is not None

    def get(self, key: str) -> Optional[Any]:
        """Return the decoded value for key, or None on miss/error"""
        if not self.redis_client:
            return None

        try:
            value = self.redis_client.get(key)
            if value is None:
                logger.debug(f"Cache miss: {key}")
                return None
            logger.debug(f"Cache hit: {key}")
            return json.loads(value)
        except redis.RedisError as e:
            logger.error(f"Cache get error: {str(e)}")
            return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Store a JSON-serializable value with a TTL (default from settings)"""
        if not self.redis_client:
            return False

        try:
            ttl = ttl or settings.CACHE_TTL
            self.redis_client.setex(key, ttl, json.dumps(value))
            logger.debug(f"Cache set: {key} (TTL: {ttl}s)")
            return True
        except redis.RedisError as e:
            logger.error(f"Cache set error: {str(e)}")
            return False

    def delete(self, *keys: str) -> bool:
        if not self.redis_client or not keys:
            return False

        try:
            self.redis_client.delete(*keys)
            logger.debug(f"Cache delete: {', '.join(keys)}")
            return True
        except redis.RedisError as e:
            logger.error(f"Cache delete error: {str(e)}")
            return False

    def clear_content(self) -> bool:
        """Drop every cached content entry"""
        if not self.redis_client:
            return False

        try:
            keys = list(self.redis_client.scan_iter(match="content:*"))
            if keys:
                self.redis_client.delete(*keys)
                logger.info(f"Cleared {len(keys)} content cache entries")
            return True
        except redis.RedisError as e:
            logger.error(f"Cache clear error: {str(e)}")
            return False


# Global instance
cache_service = CacheService(settings.REDIS_URL, enabled=settings.CACHE_ENABLED)
