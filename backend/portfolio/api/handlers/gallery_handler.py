"""
Gallery and Admin Read Handlers

Endpoints:
==========
    GET /gallery/{key}   → public category view (cached for visitors)
    GET /admin/stats     → dashboard counters
"""

from fastapi import APIRouter, Depends

from portfolio.api.dependencies.auth import AdminUser, OptionalUser, is_admin
from portfolio.api.dependencies.services import get_media_service
from portfolio.shared.schemas.media import StatsResponse
from portfolio.shared.services.media_service import MediaService


router = APIRouter()
admin_router = APIRouter()


@router.get("/{key}")
async def get_gallery(
    key: str,
    user: OptionalUser,
    service: MediaService = Depends(get_media_service),
) -> dict:
    """
    A category with its media and visible subcategories.

    The body has the GalleryResponse shape, already serialized, so cached
    and fresh responses are identical.

    Raises:
        404: Unknown key, or private category for a visitor
    """
    return await service.get_gallery(key, is_admin=is_admin(user))


@admin_router.get("/stats", response_model=StatsResponse)
async def get_stats(
    admin: AdminUser,
    service: MediaService = Depends(get_media_service),
):
    return await service.get_stats()
