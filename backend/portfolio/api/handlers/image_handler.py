"""
Image Handler

Endpoints:
==========
    POST/DELETE /images/bulk-delete   → up to BULK_DELETE_LIMIT images
    POST        /images/sync          → remove rows whose Cloudinary image is gone
    PATCH       /images/{id}          → update metadata
    DELETE      /images/{id}          → delete one image

Bulk delete bodies: ``{"imageIds": [...]}`` or
``{"images": [{"id": ..., "cloudinaryId": ...}]}``.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from portfolio.api.dependencies.auth import AdminUser
from portfolio.api.dependencies.bodies import AdminBulkDeleteRequest
from portfolio.api.dependencies.services import (
    get_media_service,
    get_reconciliation_service,
)
from portfolio.api.handlers.media_handler import bulk_delete_response, media_delete_response
from portfolio.shared.models.enums import MediaType
from portfolio.shared.schemas.deletion import (
    BulkDeleteResponse,
    MediaDeleteResponse,
    OrphanedImage,
    SyncResponse,
)
from portfolio.shared.schemas.media import ImageResponse, MediaUpdate
from portfolio.shared.services.media_service import MediaService
from portfolio.shared.services.reconciliation_service import ReconciliationService


router = APIRouter()


@router.api_route("/bulk-delete", methods=["POST", "DELETE"], response_model=BulkDeleteResponse)
async def bulk_delete_images(
    request: AdminBulkDeleteRequest,
    service: ReconciliationService = Depends(get_reconciliation_service),
):
    """
    Delete many images at once.

    Remote failures are listed in ``cloudinaryFailed``; the rows are
    deleted regardless.

    Raises:
        400: Empty, oversized or malformed body
        404: None of the ids exist (ids-only body)
    """
    outcome = await service.bulk_delete(request, MediaType.IMAGE)
    return bulk_delete_response(MediaType.IMAGE, outcome)


@router.post("/sync", response_model=SyncResponse)
async def sync_images(
    admin: AdminUser,
    service: ReconciliationService = Depends(get_reconciliation_service),
):
    """
    Delete image rows whose Cloudinary object no longer exists.

    Nothing is deleted when the Cloudinary listing was truncated.
    """
    report = await service.sweep_orphans()
    return SyncResponse(
        deleted_from_db=report.deleted_count,
        orphaned_images=[
            OrphanedImage(id=o.id, title=o.title, remote_id=o.remote_id)
            for o in report.orphans
        ],
        truncated=report.truncated,
    )


@router.patch("/{image_id}", response_model=ImageResponse)
async def update_image(
    image_id: UUID,
    data: MediaUpdate,
    admin: AdminUser,
    service: MediaService = Depends(get_media_service),
):
    return await service.update_media(image_id, MediaType.IMAGE, data)


@router.delete("/{image_id}", response_model=MediaDeleteResponse)
async def delete_image(
    image_id: UUID,
    admin: AdminUser,
    service: ReconciliationService = Depends(get_reconciliation_service),
):
    outcome = await service.delete_media(image_id, MediaType.IMAGE)
    return media_delete_response(MediaType.IMAGE, outcome)
