"""
Video Handler

Endpoints:
==========
    POST/DELETE /videos/bulk-delete   → up to BULK_DELETE_LIMIT videos
    PATCH       /videos/{id}          → update metadata
    DELETE      /videos/{id}          → delete one video
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
)
from portfolio.shared.schemas.media import MediaUpdate, VideoResponse
from portfolio.shared.services.media_service import MediaService
from portfolio.shared.services.reconciliation_service import ReconciliationService


router = APIRouter()


@router.api_route("/bulk-delete", methods=["POST", "DELETE"], response_model=BulkDeleteResponse)
async def bulk_delete_videos(
    request: AdminBulkDeleteRequest,
    service: ReconciliationService = Depends(get_reconciliation_service),
):
    outcome = await service.bulk_delete(request, MediaType.VIDEO)
    return bulk_delete_response(MediaType.VIDEO, outcome)


@router.patch("/{video_id}", response_model=VideoResponse)
async def update_video(
    video_id: UUID,
    data: MediaUpdate,
    admin: AdminUser,
    service: MediaService = Depends(get_media_service),
):
    return await service.update_media(video_id, MediaType.VIDEO, data)


@router.delete("/{video_id}", response_model=MediaDeleteResponse)
async def delete_video(
    video_id: UUID,
    admin: AdminUser,
    service: ReconciliationService = Depends(get_reconciliation_service),
):
    outcome = await service.delete_media(video_id, MediaType.VIDEO)
    return media_delete_response(MediaType.VIDEO, outcome)
