"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
the media store, and the response cache.

Service Pattern:
================
    Handler → Service → Repository → Database
                ↘ MediaStore (Cloudinary), CacheService (Redis)

Services should:
- Contain business logic and validation
- Coordinate multiple repositories if needed
- Handle transactions (via session)
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- AuthService: Credential login and token issuing
- CategoryService: Category create/read/update
- MediaService: Media registration, upload, update, gallery, stats
- ReconciliationService: Deletions that keep Cloudinary and the database consistent
- CacheService: Cached public pages and tag/path invalidation

Usage:
======
    from portfolio.shared.services import ReconciliationService

    service = ReconciliationService(db, media_store, cache)
    outcome = await service.delete_media(image_id, MediaType.IMAGE)
"""

from portfolio.shared.services.auth_service import AuthService
from portfolio.shared.services.cache_service import CacheService
from portfolio.shared.services.category_service import CategoryService
from portfolio.shared.services.media_service import MediaService
from portfolio.shared.services.reconciliation_service import ReconciliationService

__all__ = [
    "AuthService",
    "CacheService",
    "CategoryService",
    "MediaService",
    "ReconciliationService",
]
