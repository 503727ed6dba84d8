"""
Service Dependencies

FastAPI dependencies for service injection.

Services are created per request around the request's session. The media
store and cache are process-wide singletons; tests replace them through
``app.dependency_overrides[get_media_store]`` and
``app.dependency_overrides[get_cache]``.

Usage:
======
    from portfolio.api.dependencies.services import get_reconciliation_service

    @router.delete("/{image_id}")
    async def delete_image(
        image_id: UUID,
        service: ReconciliationService = Depends(get_reconciliation_service),
    ):
        return await service.delete_media(image_id, MediaType.IMAGE)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.api.dependencies.database import get_db
from portfolio.shared.adapters.cloudinary_adapter import MediaStore, get_cloudinary_adapter
from portfolio.shared.services.auth_service import AuthService
from portfolio.shared.services.cache_service import CacheService, get_cache_service
from portfolio.shared.services.category_service import CategoryService
from portfolio.shared.services.media_service import MediaService
from portfolio.shared.services.reconciliation_service import ReconciliationService


def get_media_store() -> MediaStore:
    return get_cloudinary_adapter()


def get_cache() -> CacheService:
    return get_cache_service()


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
) -> AuthService:
    """
    Dependency to get AuthService instance.

    Creates a new service instance per request with the request's db session.
    """
    return AuthService(db)


async def get_category_service(
    db: AsyncSession = Depends(get_db),
    cache: CacheService = Depends(get_cache),
) -> CategoryService:
    return CategoryService(db, cache)


async def get_media_service(
    db: AsyncSession = Depends(get_db),
    media_store: MediaStore = Depends(get_media_store),
    cache: CacheService = Depends(get_cache),
) -> MediaService:
    return MediaService(db, media_store, cache)


async def get_reconciliation_service(
    db: AsyncSession = Depends(get_db),
    media_store: MediaStore = Depends(get_media_store),
    cache: CacheService = Depends(get_cache),
) -> ReconciliationService:
    """
    Dependency to get ReconciliationService instance.
    """
    return ReconciliationService(db, media_store, cache)
