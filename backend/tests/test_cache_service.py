from types import SimpleNamespace

from redis.exceptions import ConnectionError as RedisConnectionError

from portfolio.shared.services.cache_service import CacheService, media_invalidation


class RecordingRedis:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.deleted_tags: list[list[str]] = []
        self.deleted_keys: list[str] = []
        self.published: list[tuple[str, dict]] = []
        self.stored: dict[str, tuple] = {}

    def key(self, *parts: str) -> str:
        return ":".join(("test", *parts))

    def delete_tagged(self, tags):
        if self.fail:
            raise RedisConnectionError("redis is down")
        self.deleted_tags.append(list(tags))
        return len(self.deleted_tags[-1])

    def delete(self, *keys: str) -> int:
        self.deleted_keys.extend(keys)
        return len(keys)

    def publish(self, channel: str, payload: dict) -> int:
        self.published.append((channel, payload))
        return 1

    def get_json(self, key: str):
        entry = self.stored.get(key)
        return entry[0] if entry else None

    def set_json(self, key, value, ttl, tags) -> None:
        self.stored[key] = (value, ttl, tags)


def test_media_invalidation_targets_categories_and_parents() -> None:
    parent = SimpleNamespace(key="weddings")
    child = SimpleNamespace(key="smith-wedding")

    tags, paths = media_invalidation(None, [child, parent, None, child])

    assert tags == ["media", "categories", "images", "videos", "gallery-smith-wedding", "gallery-weddings"]
    assert paths == ["/", "/gallery/smith-wedding", "/gallery/weddings"]


async def test_invalidate_drops_tags_and_paths_then_publishes() -> None:
    redis = RecordingRedis()
    cache = CacheService(redis=redis, channel="test:invalidate", ttl=60)

    await cache.invalidate(["media", "media", "gallery-weddings"], ["/", "/gallery/weddings"])

    assert redis.deleted_tags == [["media", "gallery-weddings"]]
    assert redis.deleted_keys == ["test:path:/", "test:path:/gallery/weddings"]
    assert redis.published == [
        ("test:invalidate", {"tags": ["media", "gallery-weddings"], "paths": ["/", "/gallery/weddings"]}),
    ]


async def test_invalidate_swallows_redis_failures() -> None:
    cache = CacheService(redis=RecordingRedis(fail=True), channel="test:invalidate", ttl=60)

    await cache.invalidate(["media"], ["/"])


async def test_get_and_set_use_path_keys() -> None:
    redis = RecordingRedis()
    cache = CacheService(redis=redis, channel="test:invalidate", ttl=60)

    await cache.set("/gallery/weddings", {"category": {"key": "weddings"}}, ["gallery-weddings"])

    assert redis.stored["test:path:/gallery/weddings"][1:] == (60, ["gallery-weddings"])
    assert await cache.get("/gallery/weddings") == {"category": {"key": "weddings"}}
    assert await cache.get("/gallery/other") is None
