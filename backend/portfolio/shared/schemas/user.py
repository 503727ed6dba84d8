"""
User Schemas

Request/response models for the login endpoint.
"""

from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from portfolio.shared.models.enums import UserRole
from portfolio.shared.schemas.common import BaseSchema


class UserLogin(BaseSchema):
    """Schema for credential login."""

    email: EmailStr
    password: str = Field(min_length=1, description="Account password")


class UserResponse(BaseSchema):
    """Schema for user response."""

    id: UUID
    email: str
    name: Optional[str] = None
    role: UserRole


class AuthResponse(BaseSchema):
    """Schema for authentication response."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
