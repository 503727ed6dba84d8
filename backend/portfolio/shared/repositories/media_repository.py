"""
Media Repositories

Database operations shared by the Image and Video models.

Common Operations:
==================
- list_by_category()   → Media of one category, in display order
- get_remote_refs()    → (id, cloudinary_id) pairs for a set of ids
- list_remote_refs()   → (id, cloudinary_id) pairs under a remote prefix
- next_order()         → Order value for a newly added item
- delete_by_ids()      → Batch delete (inherited)

Usage:
======
    images = ImageRepository(db)
    refs = await images.get_remote_refs([image_id_1, image_id_2])
    removed = await images.delete_by_ids([ref.id for ref in refs])
"""

from typing import Iterable, NamedTuple, Optional, TypeVar, Union
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.shared.models.enums import MediaType
from portfolio.shared.models.image import Image
from portfolio.shared.models.video import Video
from portfolio.shared.repositories.base import BaseRepository


MediaModel = TypeVar("MediaModel", Image, Video)


class RemoteRef(NamedTuple):
    """Local id of a media row and the Cloudinary public_id it points at."""

    id: UUID
    remote_id: Optional[str]
    title: Optional[str] = None
    category_id: Optional[UUID] = None


class MediaRepository(BaseRepository[MediaModel]):
    """
    Repository for operations common to images and videos.

    Subclasses bind the model and the Cloudinary resource type.
    """

    media_type: MediaType

    async def list_by_category(self, category_id: UUID) -> list[MediaModel]:
        result = await self.session.execute(
            select(self.model)
            .where(self.model.category_id == category_id)
            .order_by(self.model.order, self.model.created_at)
        )
        return list(result.scalars().all())

    async def get_remote_refs(self, ids: Iterable[UUID]) -> list[RemoteRef]:
        """
        Resolve ids to remote references without loading full rows.

        Ids that do not exist are silently absent from the result.
        """
        ids = list(ids)
        if not ids:
            return []

        result = await self.session.execute(
            select(
                self.model.id,
                self.model.cloudinary_id,
                self.model.title,
                self.model.category_id,
            ).where(self.model.id.in_(ids))
        )
        return [RemoteRef(*row) for row in result.all()]

    async def list_remote_refs(self, prefix: Optional[str] = None) -> list[RemoteRef]:
        """
        List every row that references a remote object.

        Args:
            prefix: Restrict to public_ids under this folder prefix
        """
        query = select(
            self.model.id,
            self.model.cloudinary_id,
            self.model.title,
            self.model.category_id,
        ).where(self.model.cloudinary_id.is_not(None))
        if prefix:
            query = query.where(self.model.cloudinary_id.startswith(prefix))

        result = await self.session.execute(query)
        return [RemoteRef(*row) for row in result.all()]

    async def next_order(self, category_id: UUID) -> int:
        """
        Order value for a new item appended to a category.

        SQL Generated:
            SELECT max("order") FROM images WHERE category_id = '...'
        """
        result = await self.session.execute(
            select(func.max(self.model.order)).where(self.model.category_id == category_id)
        )
        return (result.scalar() or 0) + 1


class ImageRepository(MediaRepository[Image]):
    """Repository for Image database operations."""

    media_type = MediaType.IMAGE

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Image, session)


class VideoRepository(MediaRepository[Video]):
    """Repository for Video database operations."""

    media_type = MediaType.VIDEO

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Video, session)


def media_repository(media_type: Union[MediaType, str], session: AsyncSession) -> MediaRepository:
    """Return the repository for ``media_type`` ("image" or "video")."""
    if MediaType(media_type) == MediaType.VIDEO:
        return VideoRepository(session)
    return ImageRepository(session)
