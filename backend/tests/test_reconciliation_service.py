import uuid

import pytest
from sqlalchemy.exc import SQLAlchemyError

from portfolio.shared.core.exceptions import (
    CategoryNotFoundError,
    MediaNotFoundError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from portfolio.shared.models import Category, Image, MediaType, Video
from portfolio.shared.schemas.deletion import BulkDeleteRequest
from portfolio.shared.services.reconciliation_service import ReconciliationService


@pytest.fixture
def service(session, media_store, cache) -> ReconciliationService:
    return ReconciliationService(session, media_store, cache)


# ═══════════════════════════════════════════════════════════════════════════════
# SINGLE DELETE
# ═══════════════════════════════════════════════════════════════════════════════


async def test_single_delete_removes_row_even_when_remote_fails(service, seed, media_store) -> None:
    category = await seed.category("weddings")
    image = await seed.image(category)
    media_store.failing.add(image.cloudinary_id)

    outcome = await service.delete_media(image.id, MediaType.IMAGE)

    assert media_store.delete_attempts == [image.cloudinary_id]
    assert outcome.remote_deleted == []
    assert [f.reason for f in outcome.remote_failed] == ["remote-delete-failed"]
    assert outcome.local_deleted_count == 1
    assert not await seed.exists(Image, image.id)


async def test_single_delete_unknown_id_has_no_side_effects(service, seed, media_store) -> None:
    category = await seed.category("weddings")
    await seed.image(category)

    with pytest.raises(MediaNotFoundError):
        await service.delete_media(uuid.uuid4(), MediaType.IMAGE)

    assert media_store.delete_attempts == []
    assert await seed.count(Image) == 1


async def test_delete_media_any_resolves_videos(service, seed, media_store) -> None:
    category = await seed.category("films")
    video = await seed.video(category)

    media_type, outcome = await service.delete_media_any(video.id)

    assert media_type == MediaType.VIDEO
    assert outcome.remote_deleted == [video.id]
    assert not await seed.exists(Video, video.id)


async def test_single_delete_invalidates_gallery_of_category_and_parent(service, seed, cache) -> None:
    parent = await seed.category("weddings")
    child = await seed.category("smith-wedding", parent=parent)
    image = await seed.image(child)

    await service.delete_media(image.id, MediaType.IMAGE)

    assert {"media", "images", "gallery-smith-wedding", "gallery-weddings"} <= cache.tags
    assert {"/", "/gallery/smith-wedding", "/gallery/weddings"} <= cache.paths


async def test_cache_failure_does_not_fail_the_delete(session, media_store, seed) -> None:
    class BrokenCache:
        async def invalidate(self, tags, paths=()):
            raise RuntimeError("cache down")

    category = await seed.category("weddings")
    image = await seed.image(category)

    service = ReconciliationService(session, media_store, BrokenCache())
    outcome = await service.delete_media(image.id, MediaType.IMAGE)

    assert outcome.local_deleted_count == 1


# ═══════════════════════════════════════════════════════════════════════════════
# BULK DELETE
# ═══════════════════════════════════════════════════════════════════════════════


async def test_bulk_delete_counts_partial_remote_failures(service, seed, media_store) -> None:
    category = await seed.category("weddings")
    images = [await seed.image(category, order=i) for i in range(6)]
    failing = {images[1].cloudinary_id, images[4].cloudinary_id}
    media_store.failing |= failing

    request = BulkDeleteRequest.model_validate({"imageIds": [str(i.id) for i in images]})
    outcome = await service.bulk_delete(request, MediaType.IMAGE)

    assert outcome.found_count == 6
    assert len(outcome.remote_deleted) == 6 - len(failing)
    assert {f.id for f in outcome.remote_failed} == {images[1].id, images[4].id}
    assert outcome.local_deleted_count == 6
    assert await seed.count(Image) == 0


async def test_bulk_delete_over_limit_is_rejected_before_any_side_effect(service, seed, media_store) -> None:
    category = await seed.category("weddings")
    image = await seed.image(category)
    ids = [image.id] + [uuid.uuid4() for _ in range(50)]

    with pytest.raises(ValidationError) as exc_info:
        await service.bulk_delete(BulkDeleteRequest(ids=ids), MediaType.IMAGE)

    assert exc_info.value.details == {"limit": 50, "received": 51}
    assert media_store.delete_attempts == []
    assert await seed.exists(Image, image.id)


async def test_bulk_delete_empty_list_is_rejected(service) -> None:
    with pytest.raises(ValidationError):
        await service.bulk_delete(BulkDeleteRequest(ids=[]), MediaType.IMAGE)


async def test_bulk_delete_with_no_resolvable_ids_is_not_found(service, seed, media_store) -> None:
    category = await seed.category("weddings")
    await seed.image(category)

    with pytest.raises(NotFoundError):
        await service.bulk_delete(BulkDeleteRequest(ids=[uuid.uuid4(), uuid.uuid4()]), MediaType.IMAGE)

    assert media_store.delete_attempts == []
    assert await seed.count(Image) == 1


async def test_bulk_delete_collapses_duplicate_ids(service, seed, media_store) -> None:
    category = await seed.category("weddings")
    first = await seed.image(category)
    second = await seed.image(category)

    request = BulkDeleteRequest(ids=[first.id, first.id, second.id])
    outcome = await service.bulk_delete(request, MediaType.IMAGE)

    assert outcome.requested_ids == [first.id, second.id]
    assert sorted(media_store.delete_attempts) == sorted([first.cloudinary_id, second.cloudinary_id])
    assert outcome.local_deleted_count == 2


async def test_bulk_delete_pair_form_uses_supplied_remote_ids(service, seed, media_store) -> None:
    category = await seed.category("films")
    video = await seed.video(category)
    stray = uuid.uuid4()

    request = BulkDeleteRequest.model_validate(
        {
            "videos": [
                {"id": str(video.id), "cloudinaryId": "portfolio/films/custom"},
                {"id": str(stray), "cloudinaryId": "portfolio/films/stray"},
            ]
        }
    )
    outcome = await service.bulk_delete(request, MediaType.VIDEO)

    assert sorted(media_store.delete_attempts) == ["portfolio/films/custom", "portfolio/films/stray"]
    assert outcome.found_count == 1
    assert outcome.local_deleted_count == 1
    assert not await seed.exists(Video, video.id)


async def test_bulk_delete_rows_without_remote_id_are_still_removed(service, seed, media_store) -> None:
    category = await seed.category("weddings")
    local_only = await seed.image(category, remote_id=None)
    uploaded = await seed.image(category)

    outcome = await service.bulk_delete(BulkDeleteRequest(ids=[local_only.id, uploaded.id]), MediaType.IMAGE)

    assert media_store.delete_attempts == [uploaded.cloudinary_id]
    assert [(f.id, f.reason) for f in outcome.remote_failed] == [(local_only.id, "no-remote-id")]
    assert outcome.local_deleted_count == 2


def test_bulk_request_requires_exactly_one_shape() -> None:
    with pytest.raises(ValueError):
        BulkDeleteRequest.model_validate({})
    with pytest.raises(ValueError):
        BulkDeleteRequest.model_validate({"imageIds": [], "images": []})


# ═══════════════════════════════════════════════════════════════════════════════
# CATEGORY DELETE
# ═══════════════════════════════════════════════════════════════════════════════


async def _category_tree(seed):
    category = await seed.category("weddings")
    subcategory = await seed.category("smith-wedding", parent=category)
    own = [await seed.image(category, order=i) for i in range(2)]
    nested = [await seed.image(subcategory, order=i) for i in range(3)]
    return category, subcategory, own + nested


async def test_category_delete_removes_whole_subtree(service, seed, media_store) -> None:
    category, subcategory, images = await _category_tree(seed)
    unrelated = await seed.category("portraits")
    kept = await seed.image(unrelated)
    media_store.missing_folders.add("portfolio/smith-wedding")

    report = await service.delete_category(category.id)

    assert report.deleted_images == 5
    assert report.deleted_subcategories == 1
    assert len(report.remote_deleted) == 5
    assert sorted(media_store.delete_attempts) == sorted(i.cloudinary_id for i in images)
    assert media_store.folder_attempts == ["portfolio/smith-wedding", "portfolio/weddings"]
    assert report.deleted_folders == ["portfolio/weddings"]

    assert not await seed.exists(Category, category.id)
    assert not await seed.exists(Category, subcategory.id)
    assert await seed.count(Image) == 1
    assert await seed.exists(Image, kept.id)


async def test_category_delete_twice_is_not_found(service, seed, media_store) -> None:
    category, _, _ = await _category_tree(seed)
    await service.delete_category(category.id)
    attempts = list(media_store.delete_attempts)

    with pytest.raises(CategoryNotFoundError):
        await service.delete_category(category.id)

    assert media_store.delete_attempts == attempts


async def test_category_delete_transaction_failure_keeps_rows(service, seed, media_store) -> None:
    category, subcategory, images = await _category_tree(seed)

    async def failing_delete_tree(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    service.categories.delete_tree = failing_delete_tree

    with pytest.raises(PersistenceError) as exc_info:
        await service.delete_category(category.id)

    assert exc_info.value.status_code == 500
    # Remote deletions already happened and are not undone
    assert len(media_store.delete_attempts) == 5
    assert media_store.folder_attempts == []
    assert await seed.exists(Category, category.id)
    assert await seed.exists(Category, subcategory.id)
    assert await seed.count(Image) == len(images)


async def test_category_delete_remote_failures_do_not_block_local_delete(service, seed, media_store) -> None:
    category, _, images = await _category_tree(seed)
    media_store.failing.add(images[0].cloudinary_id)
    video = await seed.video(category)

    report = await service.delete_category(category.id)

    assert report.deleted_images == 5
    assert report.deleted_videos == 1
    assert len(report.remote_deleted) == 5
    assert [f.id for f in report.remote_failed] == [images[0].id]
    assert not await seed.exists(Video, video.id)


# ═══════════════════════════════════════════════════════════════════════════════
# ORPHAN SWEEP
# ═══════════════════════════════════════════════════════════════════════════════


async def test_sweep_deletes_only_rows_missing_remotely_and_converges(service, seed, media_store) -> None:
    category = await seed.category("weddings")
    images = [await seed.image(category, order=i) for i in range(10)]
    gone = images[2:5]
    for image in gone:
        media_store.remote_ids.discard(image.cloudinary_id)

    report = await service.sweep_orphans()

    assert report.deleted_count == 3
    assert {o.id for o in report.orphans} == {i.id for i in gone}
    assert await seed.count(Image) == 7
    assert media_store.delete_attempts == []

    again = await service.sweep_orphans()
    assert again.deleted_count == 0
    assert await seed.count(Image) == 7


async def test_sweep_ignores_rows_outside_root_or_without_remote_id(service, seed, media_store) -> None:
    category = await seed.category("weddings")
    local_only = await seed.image(category, remote_id=None)
    legacy = await seed.image(category, remote_id="legacy/abc")
    media_store.remote_ids.discard("legacy/abc")

    report = await service.sweep_orphans()

    assert report.deleted_count == 0
    assert await seed.exists(Image, local_only.id)
    assert await seed.exists(Image, legacy.id)
    assert media_store.search_calls == [("portfolio/", 500)]


async def test_sweep_with_truncated_listing_deletes_nothing(service, seed, media_store) -> None:
    category = await seed.category("weddings")
    images = [await seed.image(category) for _ in range(3)]
    media_store.remote_ids.discard(images[0].cloudinary_id)
    media_store.truncated = True

    report = await service.sweep_orphans()

    assert report.truncated is True
    assert report.deleted_count == 0
    assert [o.id for o in report.orphans] == [images[0].id]
    assert await seed.count(Image) == 3


async def test_category_delete_survives_folder_cleanup_failure(service, seed, media_store) -> None:
    category, subcategory, _ = await _category_tree(seed)
    media_store.failing_folders.add("portfolio/smith-wedding")

    report = await service.delete_category(category.id)

    assert report.deleted_images == 5
    assert media_store.folder_attempts == ["portfolio/smith-wedding", "portfolio/weddings"]
    assert report.deleted_folders == ["portfolio/weddings"]
    assert not await seed.exists(Category, category.id)
    assert not await seed.exists(Category, subcategory.id)
    assert await seed.count(Image) == 0
