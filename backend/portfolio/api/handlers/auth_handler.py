"""
Authentication Handler

Handles the credential login endpoint.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
          ↘ Utils  ↗

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Business logic belongs in the SERVICE layer, not here. Invalid
credentials surface as AuthenticationError and are rendered as 401 by the
global exception handler.
"""

from fastapi import APIRouter, Depends

from portfolio.api.dependencies.services import get_auth_service
from portfolio.shared.schemas.user import AuthResponse, UserLogin, UserResponse
from portfolio.shared.services.auth_service import AuthService


router = APIRouter()


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate and return a JWT.

    Args:
        credentials: Login credentials (email, password)
        auth_service: Injected AuthService instance

    Raises:
        401: If credentials are invalid
    """
    user, access_token, expires_in = await auth_service.login_user(
        email=credentials.email,
        password=credentials.password,
    )

    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
        expires_in=expires_in,
    )
