from portfolio.shared.models import MediaType
from portfolio.shared.schemas.media import MediaCreate, MediaUpdate
from portfolio.shared.services.media_service import MediaService


async def test_register_appends_and_invalidates_after_commit(session, session_cache, seed) -> None:
    category = await seed.category("weddings")
    await seed.image(category, order=4)
    service = MediaService(session, cache=session_cache)

    image = await service.register_media(
        MediaCreate(
            category_id=category.id,
            cloudinary_id="portfolio/weddings/first-dance",
            url="https://res.example.com/portfolio/weddings/first-dance",
            title="First dance",
        )
    )

    assert image.order == 5
    assert session_cache.open_transaction == [False]
    assert "gallery-weddings" in session_cache.tags


async def test_upload_and_update_invalidate_after_commit(session, session_cache, seed, media_store) -> None:
    weddings = await seed.category("weddings")
    portraits = await seed.category("portraits")
    service = MediaService(session, media_store, session_cache)

    video = await service.upload_media(
        b"\x00\x00\x00\x18ftypmp42",
        category_id=weddings.id,
        media_type=MediaType.VIDEO,
        title="Highlights",
    )
    moved = await service.update_media(video.id, MediaType.VIDEO, MediaUpdate(category_id=portraits.id))

    assert moved.category_id == portraits.id
    assert media_store.uploads[0]["folder"] == "portfolio/weddings"
    assert session_cache.open_transaction == [False, False]
    assert {"gallery-weddings", "gallery-portraits"} <= session_cache.tags
