"""
Media Service

Business logic for adding, editing and reading images and videos.

Operations:
===========
- register_media()   → record media the client uploaded to Cloudinary itself
- upload_media()     → push bytes through the media store, then record them
- update_media()     → title, description, order, header flag, category move
- get_gallery()      → public view of a category (cached for visitors)
- get_stats()        → dashboard counters

New media is appended: its order is the category's highest order + 1.
Uploads go to ``<CLOUDINARY_ROOT_FOLDER>/<category key>``, the same folder
category deletion cleans up.

Writes commit before the cache is invalidated.
"""

import time
from typing import Any, Optional, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.config.settings import settings
from portfolio.shared.adapters.cloudinary_adapter import MediaStore
from portfolio.shared.core.exceptions import (
    CategoryNotFoundError,
    MediaNotFoundError,
    NotFoundError,
)
from portfolio.shared.core.logging import get_logger
from portfolio.shared.models.category import Category
from portfolio.shared.models.enums import MediaType
from portfolio.shared.models.image import Image
from portfolio.shared.models.video import Video
from portfolio.shared.repositories.category_repository import CategoryRepository
from portfolio.shared.repositories.media_repository import (
    ImageRepository,
    VideoRepository,
    media_repository,
)
from portfolio.shared.schemas.category import CategorySummary
from portfolio.shared.schemas.media import (
    GalleryResponse,
    ImageResponse,
    MediaCreate,
    MediaUpdate,
    StatsResponse,
    VideoResponse,
)
from portfolio.shared.services.cache_service import (
    CacheService,
    gallery_path,
    gallery_tag,
    media_invalidation,
)
from portfolio.shared.utils.constants import TAG_CATEGORIES, TAG_MEDIA
from portfolio.shared.utils.keys import slugify

logger = get_logger(__name__)

MediaRow = Union[Image, Video]

_VIDEO_ONLY_FIELDS = ("duration", "thumbnail_url", "bitrate", "frame_rate")


def to_media_response(row: MediaRow) -> Union[ImageResponse, VideoResponse]:
    if isinstance(row, Video):
        return VideoResponse.model_validate(row)
    return ImageResponse.model_validate(row)


class MediaService:
    """
    Service for media business logic.

    Attributes:
        session: Database session
        media_store: Remote media capability, needed for uploads only
        cache: Response cache (gallery reads) and invalidation target
    """

    def __init__(
        self,
        session: AsyncSession,
        media_store: Optional[MediaStore] = None,
        cache: Optional[CacheService] = None,
    ) -> None:
        self.session = session
        self.media_store = media_store
        self.cache = cache
        self.categories = CategoryRepository(session)
        self.images = ImageRepository(session)
        self.videos = VideoRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE
    # ═══════════════════════════════════════════════════════════════════════════

    async def register_media(self, data: MediaCreate) -> MediaRow:
        """
        Record media already stored in Cloudinary.

        Raises:
            CategoryNotFoundError: If the category does not exist
        """
        category = await self._get_category(data.category_id)
        repo = media_repository(data.media_type, self.session)

        fields = data.model_dump(exclude={"media_type"})
        if data.media_type == MediaType.IMAGE:
            for name in _VIDEO_ONLY_FIELDS:
                fields.pop(name)

        row = await repo.create(**fields, order=await repo.next_order(category.id))
        logger.info(
            "Media registered",
            media_id=str(row.id),
            media_type=data.media_type.value,
            category=category.key,
        )
        await self.session.commit()
        await self._invalidate(data.media_type, category)
        return row

    async def upload_media(
        self,
        data: bytes,
        *,
        category_id: UUID,
        media_type: Union[MediaType, str],
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> MediaRow:
        """
        Upload bytes to the category's folder and record the result.

        Raises:
            CategoryNotFoundError: If the category does not exist
            MediaStoreError: If the upload fails or times out
        """
        media_type = MediaType(media_type)
        category = await self._get_category(category_id)
        repo = media_repository(media_type, self.session)

        public_id = f"{int(time.time() * 1000)}_{slugify(title)}" if title else None
        uploaded = await self.media_store.upload(
            data,
            folder=f"{settings.CLOUDINARY_ROOT_FOLDER}/{category.key}",
            resource_type=media_type,
            public_id=public_id,
        )

        fields: dict[str, Any] = {
            "title": title,
            "description": description,
            "cloudinary_id": uploaded.public_id,
            "url": uploaded.url,
            "width": uploaded.width,
            "height": uploaded.height,
            "format": uploaded.format,
            "bytes": uploaded.bytes,
            "category_id": category.id,
            "order": await repo.next_order(category.id),
        }
        if media_type == MediaType.VIDEO:
            fields.update(
                duration=uploaded.duration,
                thumbnail_url=uploaded.thumbnail_url,
                bitrate=uploaded.bitrate,
                frame_rate=uploaded.frame_rate,
            )

        row = await repo.create(**fields)
        logger.info(
            "Media uploaded",
            media_id=str(row.id),
            media_type=media_type.value,
            remote_id=uploaded.public_id,
            category=category.key,
        )
        await self.session.commit()
        await self._invalidate(media_type, category)
        return row

    # ═══════════════════════════════════════════════════════════════════════════
    # UPDATE
    # ═══════════════════════════════════════════════════════════════════════════

    async def update_media(
        self,
        media_id: UUID,
        media_type: Union[MediaType, str],
        data: MediaUpdate,
    ) -> MediaRow:
        """
        Apply the fields present in ``data``.

        Raises:
            MediaNotFoundError: If the row does not exist
            CategoryNotFoundError: If moving to a category that does not exist
        """
        media_type = MediaType(media_type)
        repo = media_repository(media_type, self.session)

        row = await repo.get(media_id)
        if row is None:
            raise MediaNotFoundError(str(media_id), media_type.value)

        touched = [await self._get_category(row.category_id)]
        fields = data.model_fields_set

        if "category_id" in fields and data.category_id and data.category_id != row.category_id:
            target = await self._get_category(data.category_id)
            row.category_id = target.id
            row.order = await repo.next_order(target.id)
            touched.append(target)

        for name in ("title", "description"):
            if name in fields:
                setattr(row, name, getattr(data, name))
        if "order" in fields and data.order is not None:
            row.order = data.order
        if "is_header" in fields and data.is_header is not None:
            row.is_header = data.is_header

        await self.session.flush()
        await self.session.refresh(row)
        await self.session.commit()
        logger.info("Media updated", media_id=str(media_id), fields=sorted(fields))
        await self._invalidate(media_type, *touched)
        return row

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_gallery(self, key: str, *, is_admin: bool = False) -> dict[str, Any]:
        """
        A category with its media and visible subcategories.

        Private categories (and private subcategories) exist only for admins.
        Visitor responses are served from and stored in the cache.

        Raises:
            NotFoundError: Unknown key, or private category for a visitor
        """
        path = gallery_path(key)
        if not is_admin and self.cache is not None:
            cached = await self.cache.get(path)
            if cached is not None:
                return cached

        category = await self.categories.get_by_key(key, with_media=True)
        if category is None or (category.is_private and not is_admin):
            raise NotFoundError(f"Gallery '{key}'")

        subcategories = [s for s in category.subcategories if is_admin or not s.is_private]
        rows: list[MediaRow] = [*category.images, *category.videos]
        for sub in subcategories:
            rows.extend((*sub.images, *sub.videos))
        rows.sort(key=lambda r: (r.order, r.created_at))

        gallery = GalleryResponse(
            category=CategorySummary.model_validate(category),
            parent=CategorySummary.model_validate(category.parent) if category.parent else None,
            subcategories=[CategorySummary.model_validate(s) for s in subcategories],
            media=[to_media_response(r) for r in rows],
        ).model_dump(mode="json", by_alias=True)

        if not is_admin and self.cache is not None:
            tags = [gallery_tag(key), TAG_MEDIA, TAG_CATEGORIES]
            if category.parent:
                tags.append(gallery_tag(category.parent.key))
            await self.cache.set(path, gallery, tags)
        return gallery

    async def get_stats(self) -> StatsResponse:
        return StatsResponse(
            images=await self.images.count(),
            videos=await self.videos.count(),
            categories=await self.categories.count(),
            subcategories=await self.categories.count(Category.parent_id.is_not(None)),
            private_categories=await self.categories.count(Category.is_private.is_(True)),
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _get_category(self, category_id: UUID) -> Category:
        category = await self.categories.get_with_parent(category_id)
        if category is None:
            raise CategoryNotFoundError(str(category_id))
        return category

    async def _invalidate(self, media_type: MediaType, *categories: Category) -> None:
        if self.cache is None:
            return
        touched: list[Optional[Category]] = []
        for category in categories:
            touched.extend((category, category.parent))
        tags, paths = media_invalidation(media_type, touched)
        await self.cache.invalidate(tags, paths)
