"""
Deletion Schemas

Request/response models for the delete, bulk-delete, category-delete and
image-sync endpoints.

Bulk Delete Bodies:
===================
Both shapes are accepted and normalized into one list of targets:

    {"imageIds": ["<uuid>", ...]}                          ← ids only, looked up
    {"images": [{"id": "<uuid>", "cloudinaryId": "..."}]}   ← caller supplies pairs

(``videoIds`` / ``videos`` on the video endpoint; ``ids`` / ``items`` on both.)
"""

from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, Field, model_validator

from portfolio.shared.schemas.common import BaseSchema


# ═══════════════════════════════════════════════════════════════════════════════
# REQUEST SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════════


class MediaTarget(BaseSchema):
    """A media row id paired with its Cloudinary public_id."""

    id: UUID
    remote_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("cloudinaryId", "remoteId", "remote_id", "publicId"),
    )


class BulkDeleteRequest(BaseSchema):
    """
    Bulk delete body in either accepted shape.

    Size limits are enforced by the service so an oversized batch is
    reported with the configured limit in the error details.
    """

    ids: Optional[list[UUID]] = Field(
        default=None,
        validation_alias=AliasChoices("ids", "imageIds", "videoIds", "mediaIds"),
    )
    items: Optional[list[MediaTarget]] = Field(
        default=None,
        validation_alias=AliasChoices("items", "images", "videos", "media"),
    )

    @model_validator(mode="after")
    def require_one_form(self):
        if self.ids is None and self.items is None:
            raise ValueError("Provide either a list of ids or a list of {id, cloudinaryId} items")
        if self.ids is not None and self.items is not None:
            raise ValueError("Provide ids or items, not both")
        return self

    @property
    def ids_only(self) -> bool:
        return self.items is None


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSE SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════════


class RemoteFailure(BaseSchema):
    id: UUID
    reason: str


class MediaDeleteResponse(BaseSchema):
    success: bool = True
    message: str
    remote_deleted: bool


class BulkDeleteResponse(BaseSchema):
    """
    Aggregate bulk delete counts.

    ``cloudinaryDeleted`` counts successful remote deletions; failures are
    listed in ``cloudinaryFailed`` and never turn the response into an error.
    """

    success: bool = True
    message: str
    requested_count: int
    found_count: int
    deleted_count: int
    cloudinary_deleted: int
    cloudinary_failed: list[RemoteFailure] = Field(default_factory=list)


class CategoryDeleteResponse(BaseSchema):
    success: bool = True
    message: str
    deleted_images: int
    deleted_videos: int
    deleted_media: int
    deleted_subcategories: int
    cloudinary_images_deleted: int
    cloudinary_folders_deleted: int
    deleted_folders: list[str] = Field(default_factory=list)


class OrphanedImage(BaseSchema):
    id: UUID
    title: Optional[str] = None
    remote_id: Optional[str] = None


class SyncResponse(BaseSchema):
    """
    Orphan sweep result.

    When the remote listing hit its cap, ``truncated`` is true and nothing
    was deleted: ``orphanedImages`` is then only a candidate list.
    """

    success: bool = True
    deleted_from_db: int
    orphaned_images: list[OrphanedImage] = Field(default_factory=list)
    truncated: bool = False
