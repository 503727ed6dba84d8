"""
Media Schemas

Request/response models for image, video, gallery and stats endpoints.

Request Flow:
=============
    POST /media          → MediaCreate  → MediaResponse (201)
    POST /media/upload   → multipart    → MediaResponse (201)
    PATCH /images/{id}   → MediaUpdate  → ImageResponse
    PATCH /videos/{id}   → MediaUpdate  → VideoResponse
    GET /gallery/{key}   →              → GalleryResponse
    GET /admin/stats     →              → StatsResponse
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import AliasChoices, Field

from portfolio.shared.models.enums import MediaType
from portfolio.shared.schemas.category import CategorySummary
from portfolio.shared.schemas.common import BaseSchema


# ═══════════════════════════════════════════════════════════════════════════════
# REQUEST SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════════


class MediaCreate(BaseSchema):
    """
    Register media that the client already uploaded to Cloudinary.

    The order is assigned server-side (last order in the category + 1).
    """

    media_type: MediaType = Field(
        default=MediaType.IMAGE,
        validation_alias=AliasChoices("type", "mediaType", "media_type"),
    )
    category_id: UUID
    cloudinary_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("cloudinaryId", "publicId", "cloudinary_id"),
    )
    url: str = Field(min_length=1)
    title: Optional[str] = None
    description: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[str] = None
    bytes: Optional[int] = None
    duration: Optional[float] = None
    thumbnail_url: Optional[str] = None
    bitrate: Optional[int] = None
    frame_rate: Optional[float] = None
    is_header: bool = False


class MediaUpdate(BaseSchema):
    """Partial update of an image or video."""

    title: Optional[str] = None
    description: Optional[str] = None
    order: Optional[int] = Field(default=None, ge=0)
    is_header: Optional[bool] = None
    category_id: Optional[UUID] = None


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSE SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════════


class ImageResponse(BaseSchema):
    id: UUID
    title: Optional[str] = None
    description: Optional[str] = None
    cloudinary_id: Optional[str] = None
    url: str
    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[str] = None
    bytes: Optional[int] = None
    is_header: bool = False
    order: int
    category_id: UUID
    created_at: datetime
    updated_at: datetime
    type: Literal[MediaType.IMAGE] = MediaType.IMAGE


class VideoResponse(ImageResponse):
    duration: Optional[float] = None
    thumbnail_url: Optional[str] = None
    bitrate: Optional[int] = None
    frame_rate: Optional[float] = None
    type: Literal[MediaType.VIDEO] = MediaType.VIDEO  # type: ignore[assignment]


MediaResponse = Annotated[Union[ImageResponse, VideoResponse], Field(discriminator="type")]


class GalleryResponse(BaseSchema):
    """
    A category as visitors see it.

    ``media`` merges images and videos of the category and of its visible
    subcategories, sorted by order.
    """

    category: CategorySummary
    parent: Optional[CategorySummary] = None
    subcategories: list[CategorySummary] = Field(default_factory=list)
    media: list[MediaResponse] = Field(default_factory=list)


class StatsResponse(BaseSchema):
    images: int
    videos: int
    categories: int
    subcategories: int
    private_categories: int
