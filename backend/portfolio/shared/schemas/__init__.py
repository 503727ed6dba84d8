"""
Pydantic Schemas

Request and response models for the API. JSON keys are camelCase.

Schema Categories:
==================
- common: Base schema, error envelope, health response
- user: Login and token responses
- category: Category CRUD
- media: Image/video registration, updates, gallery, stats
- deletion: Single, bulk and category deletion, orphan sweep

Usage:
======
    from portfolio.shared.schemas.deletion import BulkDeleteRequest, BulkDeleteResponse
    from portfolio.shared.schemas.common import ErrorResponse
"""

from portfolio.shared.schemas.common import BaseSchema, ErrorBody, ErrorResponse, HealthResponse
from portfolio.shared.schemas.user import UserLogin, UserResponse, AuthResponse
from portfolio.shared.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategorySummary,
    CategoryResponse,
    CategoryListResponse,
)
from portfolio.shared.schemas.media import (
    MediaCreate,
    MediaUpdate,
    ImageResponse,
    VideoResponse,
    MediaResponse,
    GalleryResponse,
    StatsResponse,
)
from portfolio.shared.schemas.deletion import (
    MediaTarget,
    BulkDeleteRequest,
    RemoteFailure,
    MediaDeleteResponse,
    BulkDeleteResponse,
    CategoryDeleteResponse,
    OrphanedImage,
    SyncResponse,
)

__all__ = [
    # Common
    "BaseSchema",
    "ErrorBody",
    "ErrorResponse",
    "HealthResponse",
    # User
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    # Category
    "CategoryCreate",
    "CategoryUpdate",
    "CategorySummary",
    "CategoryResponse",
    "CategoryListResponse",
    # Media
    "MediaCreate",
    "MediaUpdate",
    "ImageResponse",
    "VideoResponse",
    "MediaResponse",
    "GalleryResponse",
    "StatsResponse",
    # Deletion
    "MediaTarget",
    "BulkDeleteRequest",
    "RemoteFailure",
    "MediaDeleteResponse",
    "BulkDeleteResponse",
    "CategoryDeleteResponse",
    "OrphanedImage",
    "SyncResponse",
]
