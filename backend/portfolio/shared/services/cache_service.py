"""
Cache Service

Response caching for public reads and invalidation after admin mutations.

Tags & Paths:
=============
Every cached response is registered under the tags it depends on:

    GET /gallery/<key>   → tags: gallery-<key>, media, categories
    GET /categories      → tags: categories

A mutation invalidates by tag and by path:

    delete image in "summer-wedding" (child of "weddings")
        tags:  media, images, categories, gallery-summer-wedding, gallery-weddings
        paths: /, /gallery/summer-wedding, /gallery/weddings

Invalidation deletes the tagged and path keys in Redis and publishes
``{"tags": [...], "paths": [...]}`` on CACHE_INVALIDATION_CHANNEL so a
rendering tier can revalidate its own pages.

Failure Policy:
===============
Invalidation is fire-and-forget: Redis failures are logged and swallowed,
they never fail the mutation that triggered them.
"""

import asyncio
from typing import Any, Iterable, Optional, Protocol, Union

from redis.exceptions import RedisError

from portfolio.config.settings import settings
from portfolio.shared.adapters.redis_adapter import RedisAdapter, get_redis_adapter
from portfolio.shared.core.logging import get_logger
from portfolio.shared.models.category import Category
from portfolio.shared.models.enums import MediaType
from portfolio.shared.utils.constants import (
    GALLERY_TAG_PREFIX,
    TAG_CATEGORIES,
    TAG_IMAGES,
    TAG_MEDIA,
    TAG_VIDEOS,
)

logger = get_logger(__name__)


class CacheInvalidator(Protocol):
    """What the mutation services need from the cache layer."""

    async def invalidate(self, tags: Iterable[str], paths: Iterable[str] = ()) -> None: ...


# ═══════════════════════════════════════════════════════════════════════════════
# TAG HELPERS
# ═══════════════════════════════════════════════════════════════════════════════


def gallery_tag(key: str) -> str:
    return f"{GALLERY_TAG_PREFIX}{key}"


def gallery_path(key: str) -> str:
    return f"/gallery/{key}"


def category_targets(
    categories: Iterable[Optional[Category]],
) -> tuple[list[str], list[str]]:
    """
    Gallery tags and paths for a set of categories (None entries skipped).

    Returns:
        (tags, paths), each de-duplicated, order preserved
    """
    keys = list(dict.fromkeys(c.key for c in categories if c is not None))
    return [gallery_tag(k) for k in keys], [gallery_path(k) for k in keys]


def media_invalidation(
    media_type: Union[MediaType, str, None],
    categories: Iterable[Optional[Category]],
) -> tuple[list[str], list[str]]:
    """
    Tags and paths to invalidate after media in ``categories`` changed.

    ``media_type`` None means both images and videos were touched.
    """
    type_tags = {
        MediaType.IMAGE: [TAG_IMAGES],
        MediaType.VIDEO: [TAG_VIDEOS],
        None: [TAG_IMAGES, TAG_VIDEOS],
    }[MediaType(media_type) if media_type else None]
    gallery_tags, gallery_paths = category_targets(categories)
    return [TAG_MEDIA, TAG_CATEGORIES, *type_tags, *gallery_tags], ["/", *gallery_paths]


# ═══════════════════════════════════════════════════════════════════════════════
# SERVICE
# ═══════════════════════════════════════════════════════════════════════════════


class CacheService:
    """
    Redis-backed response cache.

    The Redis client is synchronous; calls run in a worker thread.
    """

    def __init__(
        self,
        redis: Optional[RedisAdapter] = None,
        channel: Optional[str] = None,
        ttl: Optional[int] = None,
    ) -> None:
        self.redis = redis or get_redis_adapter()
        self.channel = channel or settings.CACHE_INVALIDATION_CHANNEL
        self.ttl = ttl or settings.CACHE_TTL_SECONDS

    def path_key(self, path: str) -> str:
        return self.redis.key("path", path)

    async def get(self, path: str) -> Optional[Any]:
        """Cached JSON for ``path``, or None."""
        return await asyncio.to_thread(self.redis.get_json, self.path_key(path))

    async def set(self, path: str, value: Any, tags: Iterable[str]) -> None:
        await asyncio.to_thread(
            self.redis.set_json,
            self.path_key(path),
            value,
            self.ttl,
            list(tags),
        )

    async def invalidate(self, tags: Iterable[str], paths: Iterable[str] = ()) -> None:
        """
        Drop cached responses for ``tags`` and ``paths`` and notify subscribers.

        Never raises on Redis failure.
        """
        tags = list(dict.fromkeys(tags))
        paths = list(dict.fromkeys(paths))
        try:
            removed = await asyncio.to_thread(self._invalidate, tags, paths)
        except RedisError as e:
            logger.warning("Cache invalidation failed", tags=tags, paths=paths, error=str(e))
            return
        logger.debug("Cache invalidated", tags=tags, paths=paths, removed_keys=removed)

    def _invalidate(self, tags: list[str], paths: list[str]) -> int:
        removed = self.redis.delete_tagged(tags)
        removed += self.redis.delete(*(self.path_key(p) for p in paths))
        self.redis.publish(self.channel, {"tags": tags, "paths": paths})
        return removed


def get_cache_service() -> CacheService:
    return CacheService()
