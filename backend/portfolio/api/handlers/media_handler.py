"""
Media Handler

Endpoints that work on either media type.

Endpoints:
==========
    POST   /media          → register media uploaded directly to Cloudinary
    POST   /media/upload   → multipart upload through the server
    DELETE /media/{id}     → delete one image or video (images checked first)

The response builders at the bottom are shared with the image and video
handlers.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from portfolio.api.dependencies.auth import AdminUser
from portfolio.api.dependencies.services import (
    get_media_service,
    get_reconciliation_service,
)
from portfolio.shared.core.exceptions import ValidationError
from portfolio.shared.models.enums import MediaType
from portfolio.shared.schemas.deletion import (
    BulkDeleteResponse,
    MediaDeleteResponse,
    RemoteFailure,
)
from portfolio.shared.schemas.media import MediaCreate, MediaResponse
from portfolio.shared.services.media_service import MediaService, to_media_response
from portfolio.shared.services.reconciliation_service import (
    DeletionOutcome,
    ReconciliationService,
)


router = APIRouter()


@router.post("", response_model=MediaResponse, status_code=status.HTTP_201_CREATED)
async def register_media(
    data: MediaCreate,
    admin: AdminUser,
    service: MediaService = Depends(get_media_service),
):
    """
    Save metadata for media the admin UI uploaded to Cloudinary itself.

    Raises:
        404: Category not found
    """
    return to_media_response(await service.register_media(data))


@router.post("/upload", response_model=MediaResponse, status_code=status.HTTP_201_CREATED)
async def upload_media(
    admin: AdminUser,
    file: UploadFile = File(...),
    category_id: UUID = Form(..., alias="categoryId"),
    media_type: Optional[MediaType] = Form(default=None, alias="type"),
    title: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    service: MediaService = Depends(get_media_service),
):
    """
    Upload a file to the category's Cloudinary folder and record it.

    The media type defaults to the file's content type (``video/*`` → video).

    Raises:
        400: Empty file
        404: Category not found
        503: Cloudinary upload failed
    """
    data = await file.read()
    if not data:
        raise ValidationError("Uploaded file is empty")

    if media_type is None:
        content_type = file.content_type or ""
        media_type = MediaType.VIDEO if content_type.startswith("video/") else MediaType.IMAGE

    row = await service.upload_media(
        data,
        category_id=category_id,
        media_type=media_type,
        title=title or None,
        description=description or None,
    )
    return to_media_response(row)


@router.delete("/{media_id}", response_model=MediaDeleteResponse)
async def delete_media(
    media_id: UUID,
    admin: AdminUser,
    service: ReconciliationService = Depends(get_reconciliation_service),
):
    media_type, outcome = await service.delete_media_any(media_id)
    return media_delete_response(media_type, outcome)


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSE BUILDERS
# ═══════════════════════════════════════════════════════════════════════════════


def media_delete_response(media_type: MediaType, outcome: DeletionOutcome) -> MediaDeleteResponse:
    return MediaDeleteResponse(
        message=f"{media_type.value.capitalize()} deleted successfully",
        remote_deleted=bool(outcome.remote_deleted),
    )


def bulk_delete_response(media_type: MediaType, outcome: DeletionOutcome) -> BulkDeleteResponse:
    return BulkDeleteResponse(
        message=f"Successfully deleted {outcome.local_deleted_count} {media_type.value}s",
        requested_count=len(outcome.requested_ids),
        found_count=outcome.found_count,
        deleted_count=outcome.local_deleted_count,
        cloudinary_deleted=len(outcome.remote_deleted),
        cloudinary_failed=[
            RemoteFailure(id=f.id, reason=f.reason) for f in outcome.remote_failed
        ],
    )
