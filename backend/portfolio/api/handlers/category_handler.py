"""
Category Handler

Category listing, CRUD and subtree deletion.

Endpoints:
==========
    GET    /categories        → public list (private entries for admins only)
    GET    /categories/{id}   → admin
    POST   /categories        → admin
    PATCH  /categories/{id}   → admin
    DELETE /categories/{id}   → admin, deletes subcategories and all media
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from portfolio.api.dependencies.auth import AdminUser, OptionalUser, is_admin
from portfolio.api.dependencies.services import (
    get_category_service,
    get_reconciliation_service,
)
from portfolio.shared.models.category import Category
from portfolio.shared.schemas.category import (
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
)
from portfolio.shared.schemas.deletion import CategoryDeleteResponse
from portfolio.shared.services.category_service import CategoryService
from portfolio.shared.services.reconciliation_service import ReconciliationService


router = APIRouter()


def _to_response(category: Category, include_private: bool = True) -> CategoryResponse:
    response = CategoryResponse.model_validate(category)
    if not include_private:
        response.subcategories = [s for s in response.subcategories if not s.is_private]
    return response


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    user: OptionalUser,
    service: CategoryService = Depends(get_category_service),
):
    """Top-level categories with their subcategories, ordered by name."""
    include_private = is_admin(user)
    categories = await service.list_categories(include_private=include_private)
    return CategoryListResponse(
        categories=[_to_response(c, include_private) for c in categories],
    )


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: UUID,
    admin: AdminUser,
    service: CategoryService = Depends(get_category_service),
):
    return _to_response(await service.get_category(category_id))


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    admin: AdminUser,
    service: CategoryService = Depends(get_category_service),
):
    """
    Create a category.

    The key is derived from the name when omitted ("Summer Wedding!!" →
    "summer-wedding", then "summer-wedding-1", ...).

    Raises:
        404: Parent not found
        409: Key already taken
    """
    return _to_response(await service.create_category(data))


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    admin: AdminUser,
    service: CategoryService = Depends(get_category_service),
):
    return _to_response(await service.update_category(category_id, data))


@router.delete("/{category_id}", response_model=CategoryDeleteResponse)
async def delete_category(
    category_id: UUID,
    admin: AdminUser,
    service: ReconciliationService = Depends(get_reconciliation_service),
):
    """
    Delete a category, its subcategories and all their media.

    Remote media is deleted first; remote failures only lower the
    ``cloudinaryImagesDeleted`` count.

    Raises:
        404: Category not found
        500: Local transaction failed (remote deletions are not undone)
    """
    report = await service.delete_category(category_id)
    return CategoryDeleteResponse(
        message="Category and all content deleted successfully",
        deleted_images=report.deleted_images,
        deleted_videos=report.deleted_videos,
        deleted_media=report.deleted_media,
        deleted_subcategories=report.deleted_subcategories,
        cloudinary_images_deleted=len(report.remote_deleted),
        cloudinary_folders_deleted=len(report.deleted_folders),
        deleted_folders=report.deleted_folders,
    )
