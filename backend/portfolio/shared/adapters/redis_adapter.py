"""
Redis adapter - Response caching and invalidation.

Provides:
- JSON values with TTL
- Tag sets: a cached key is registered under every tag it depends on
- Pub/sub notification of invalidations for the rendering tier

Read helpers log and return a miss on RedisError. Write helpers used by the
invalidation path raise, so the caller decides whether to swallow.
"""

import functools
import json
import logging
from typing import Any, Iterable, Optional

import redis
from redis.exceptions import RedisError

from ...config.settings import settings

logger = logging.getLogger(__name__)


class RedisAdapter:
    """
    Adapter for Redis operations.

    Handles:
    - Cached JSON responses
    - Tag membership sets
    - Invalidation messages
    """

    def __init__(self, url: Optional[str] = None, prefix: Optional[str] = None):
        """
        Initialize Redis adapter.

        Args:
            url: Redis URL (redis://host:port/db)
            prefix: Namespace prepended to every key
        """
        self.url = url or settings.REDIS_URL
        self.prefix = prefix or settings.CACHE_KEY_PREFIX
        self._client: Optional[redis.Redis] = None

    @property
    def client(self) -> redis.Redis:
        """Lazy-loaded Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
            )
        return self._client

    def key(self, *parts: str) -> str:
        return ":".join((self.prefix, *parts))

    # ═══════════════════════════════════════════════════════════════════════════
    # VALUES
    # ═══════════════════════════════════════════════════════════════════════════

    def get_json(self, key: str) -> Optional[Any]:
        """
        Get a JSON value from cache.

        Returns:
            Parsed JSON, or None on miss, decode error or Redis failure
        """
        try:
            value = self.client.get(key)
        except RedisError as e:
            logger.warning("Redis get failed for %s: %s", key, e)
            return None
        if value is None:
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return None

    def set_json(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None,
        tags: Iterable[str] = (),
    ) -> bool:
        """
        Cache a JSON value and register it under ``tags``.

        Returns:
            True if successful
        """
        try:
            pipe = self.client.pipeline()
            if ttl:
                pipe.setex(key, ttl, json.dumps(value, default=str))
            else:
                pipe.set(key, json.dumps(value, default=str))
            for tag in tags:
                pipe.sadd(self.key("tag", tag), key)
            pipe.execute()
            return True
        except RedisError as e:
            logger.warning("Redis set failed for %s: %s", key, e)
            return False

    # ═══════════════════════════════════════════════════════════════════════════
    # INVALIDATION
    # ═══════════════════════════════════════════════════════════════════════════

    def delete_tagged(self, tags: Iterable[str]) -> int:
        """
        Delete every key registered under any of ``tags``, plus the tag sets.

        Raises:
            RedisError: On connection or command failure
        """
        tag_keys = [self.key("tag", tag) for tag in tags]
        if not tag_keys:
            return 0

        members: set[str] = set()
        for tag_key in tag_keys:
            members.update(self.client.smembers(tag_key))

        return int(self.client.delete(*members, *tag_keys))

    def delete(self, *keys: str) -> int:
        """
        Delete keys.

        Raises:
            RedisError: On connection or command failure
        """
        if not keys:
            return 0
        return int(self.client.delete(*keys))

    def publish(self, channel: str, payload: dict[str, Any]) -> int:
        """
        Publish a JSON message.

        Returns:
            Number of subscribers that received it

        Raises:
            RedisError: On connection or command failure
        """
        return int(self.client.publish(channel, json.dumps(payload)))

    def ping(self) -> bool:
        """
        Check Redis connectivity.

        Returns:
            True if connected
        """
        try:
            return bool(self.client.ping())
        except RedisError:
            return False


@functools.lru_cache(maxsize=1)
def get_redis_adapter() -> RedisAdapter:
    """Get or create Redis adapter singleton."""
    return RedisAdapter()
