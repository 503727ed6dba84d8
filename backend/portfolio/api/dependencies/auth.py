"""
Authentication Dependencies

FastAPI dependencies for bearer-token authentication and the admin gate.

Dependency Hierarchy:
=====================
    get_token_payload()     ← Decode the JWT if an Authorization header is present
           │
           ├──▶ get_current_user_optional()  ← Visitor (None) or token user
           │
           └──▶ require_admin()              ← 401 unless role == ADMIN

A missing header, a bad token, and a non-admin token are all rejected with
401 on admin routes.

Type Aliases:
=============
    AdminUser     - Decoded token of an admin
    OptionalUser  - Decoded token, or None for anonymous visitors

Usage:
======
    from portfolio.api.dependencies.auth import AdminUser

    @router.delete("/{image_id}")
    async def delete_image(image_id: UUID, admin: AdminUser):
        ...
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...config.settings import settings
from ...shared.core.exceptions import AuthenticationError
from ...shared.models.enums import UserRole
from ...shared.utils.security import SecurityUtils


# Missing headers are handled here rather than by FastAPI's 403
security = HTTPBearer(auto_error=False)


async def get_token_payload(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> Optional[dict]:
    """
    Decode the bearer token if one was sent.

    Returns:
        Decoded token payload, or None when no Authorization header is present

    Raises:
        AuthenticationError: If a token was sent but is invalid or expired
    """
    if not credentials:
        return None

    try:
        return SecurityUtils.decode_access_token(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError(str(e)) from e


async def get_current_user_optional(
    payload: Annotated[Optional[dict], Depends(get_token_payload)],
) -> Optional[dict]:
    if not payload or not payload.get("user_id"):
        return None
    return {
        "user_id": payload["user_id"],
        "email": payload.get("email"),
        "role": payload.get("role"),
    }


async def require_admin(
    user: Annotated[Optional[dict], Depends(get_current_user_optional)],
) -> dict:
    """
    Gate for every mutating and admin-only route.

    Raises:
        AuthenticationError: No token, invalid token, or role is not ADMIN
    """
    if user is None:
        raise AuthenticationError("Authorization header required")
    if user["role"] != UserRole.ADMIN.value:
        raise AuthenticationError("Admin access required")
    return user


def is_admin(user: Optional[dict]) -> bool:
    return bool(user) and user.get("role") == UserRole.ADMIN.value


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

AdminUser = Annotated[dict, Depends(require_admin)]
OptionalUser = Annotated[Optional[dict], Depends(get_current_user_optional)]
