"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: require_admin(), AdminUser, OptionalUser
- Request bodies: AdminBulkDeleteRequest (parsed after the admin check)
- Services: get_*_service(), get_media_store(), get_cache()

Usage:
======
    from portfolio.api.dependencies import AdminUser, DbSession

    @router.get("/admin/stats")
    async def stats(db: DbSession, admin: AdminUser):
        ...
"""

from portfolio.api.dependencies.database import (
    get_db,
    DbSession,
)
from portfolio.api.dependencies.auth import (
    get_token_payload,
    get_current_user_optional,
    require_admin,
    is_admin,
    AdminUser,
    OptionalUser,
)
from portfolio.api.dependencies.bodies import AdminBulkDeleteRequest, admin_bulk_delete_request
from portfolio.api.dependencies.services import (
    get_media_store,
    get_cache,
    get_auth_service,
    get_category_service,
    get_media_service,
    get_reconciliation_service,
)

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "get_token_payload",
    "get_current_user_optional",
    "require_admin",
    "is_admin",
    "AdminUser",
    "OptionalUser",
    # Request bodies
    "AdminBulkDeleteRequest",
    "admin_bulk_delete_request",
    # Services
    "get_media_store",
    "get_cache",
    "get_auth_service",
    "get_category_service",
    "get_media_service",
    "get_reconciliation_service",
]
