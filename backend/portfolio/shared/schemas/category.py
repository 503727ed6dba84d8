"""
Category Schemas

Request/response models for category endpoints.

Request Flow:
=============
    POST /categories     → CategoryCreate   → CategoryResponse (201)
    PATCH /categories/id → CategoryUpdate   → CategoryResponse
    GET /categories      →                  → CategoryListResponse

Social links are a free-form platform → URL map; entries with an empty
URL are dropped on input.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from portfolio.shared.schemas.common import BaseSchema


def _clean_social_links(value: Optional[dict[str, Optional[str]]]) -> Optional[dict[str, str]]:
    if value is None:
        return None
    return {
        platform: url.strip()
        for platform, url in value.items()
        if url and url.strip()
    }


# ═══════════════════════════════════════════════════════════════════════════════
# REQUEST SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════════


class CategoryCreate(BaseSchema):
    """
    Schema for creating a category.

    When ``key`` is omitted one is derived from ``name``.
    """

    name: str = Field(min_length=1, max_length=255)
    key: Optional[str] = Field(default=None, max_length=160, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    description: Optional[str] = None
    is_private: bool = False
    parent_id: Optional[UUID] = None
    social_links: Optional[dict[str, Optional[str]]] = None

    @field_validator("social_links")
    @classmethod
    def drop_empty_links(cls, value):
        return _clean_social_links(value)


class CategoryUpdate(BaseSchema):
    """
    Schema for a partial category update.

    Only fields present in the request body are applied; send
    ``parentId: null`` to promote a subcategory to top level.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    key: Optional[str] = Field(default=None, max_length=160, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    description: Optional[str] = None
    is_private: Optional[bool] = None
    parent_id: Optional[UUID] = None
    social_links: Optional[dict[str, Optional[str]]] = None

    @field_validator("social_links")
    @classmethod
    def drop_empty_links(cls, value):
        return _clean_social_links(value)


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSE SCHEMAS
# ═══════════════════════════════════════════════════════════════════════════════


class CategorySummary(BaseSchema):
    """Category without its children."""

    id: UUID
    key: str
    name: str
    description: Optional[str] = None
    is_private: bool
    parent_id: Optional[UUID] = None
    social_links: Optional[dict[str, str]] = None
    created_at: datetime
    updated_at: datetime


class CategoryResponse(CategorySummary):
    """Category with its direct subcategories."""

    subcategories: list[CategorySummary] = Field(default_factory=list)


class CategoryListResponse(BaseSchema):
    categories: list[CategoryResponse]
