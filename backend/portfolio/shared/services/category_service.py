"""
Category Service

Business logic for creating, reading and updating categories. Deletion
lives in ReconciliationService because it also removes remote media.

Rules:
======
- Keys are unique. A missing key is derived from the name; an explicit
  key that is taken is a 409.
- Only one level of nesting: a parent must itself be top-level, and a
  category that has subcategories cannot become a subcategory.
- Changes are committed before the cache is invalidated.
- Concurrent creators can race on a derived key; the unique constraint
  decides and the loser gets a 409.

Usage:
======
    service = CategoryService(db, cache)
    category = await service.create_category(CategoryCreate(name="Summer Wedding"))
    category.key  # "summer-wedding"
"""

from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.shared.core.exceptions import (
    CategoryNotFoundError,
    DuplicateResourceError,
    ValidationError,
)
from portfolio.shared.core.logging import get_logger
from portfolio.shared.models.category import Category
from portfolio.shared.repositories.category_repository import CategoryRepository
from portfolio.shared.schemas.category import CategoryCreate, CategoryUpdate
from portfolio.shared.services.cache_service import CacheInvalidator, category_targets
from portfolio.shared.utils.constants import TAG_CATEGORIES
from portfolio.shared.utils.keys import generate_unique_key

logger = get_logger(__name__)


class CategoryService:
    """
    Service for category business logic.

    Attributes:
        session: Database session
        repo: CategoryRepository instance
        cache: Invalidation target for public pages
    """

    def __init__(self, session: AsyncSession, cache: Optional[CacheInvalidator] = None) -> None:
        self.session = session
        self.repo = CategoryRepository(session)
        self.cache = cache

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_categories(self, *, include_private: bool) -> list[Category]:
        return await self.repo.list_top_level(include_private=include_private)

    async def get_category(self, category_id: UUID) -> Category:
        """
        Raises:
            CategoryNotFoundError: If the category does not exist
        """
        category = await self.repo.get_with_parent(category_id)
        if category is None:
            raise CategoryNotFoundError(str(category_id))
        return category

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_category(self, data: CategoryCreate) -> Category:
        """
        Create a category.

        Raises:
            CategoryNotFoundError: Parent does not exist
            ValidationError: Parent is itself a subcategory
            DuplicateResourceError: Key already taken
        """
        parent = await self._resolve_parent(data.parent_id) if data.parent_id else None

        if data.key:
            if await self.repo.key_exists(data.key):
                raise DuplicateResourceError(f"Category key '{data.key}' already exists")
            key = data.key
        else:
            key = await generate_unique_key(data.name, self.repo.key_exists)

        try:
            category = await self.repo.create(
                key=key,
                name=data.name,
                description=data.description,
                is_private=data.is_private,
                parent_id=parent.id if parent else None,
                social_links=data.social_links or None,
            )
            await self.session.commit()
        except IntegrityError:
            raise DuplicateResourceError(f"Category key '{key}' already exists")

        logger.info("Category created", category_id=str(category.id), key=key)
        await self._invalidate([category, parent])
        return await self.get_category(category.id)

    async def update_category(self, category_id: UUID, data: CategoryUpdate) -> Category:
        """
        Apply the fields present in ``data``.

        Raises:
            CategoryNotFoundError: Category or new parent does not exist
            ValidationError: Invalid nesting
            DuplicateResourceError: New key already taken
        """
        category = await self.get_category(category_id)
        fields = data.model_fields_set
        previous_tags, previous_paths = category_targets([category, category.parent])
        touched: list[Optional[Category]] = []

        if "key" in fields and data.key and data.key != category.key:
            if await self.repo.key_exists(data.key, exclude_id=category.id):
                raise DuplicateResourceError(f"Category key '{data.key}' already exists")
            category.key = data.key

        if "parent_id" in fields and data.parent_id != category.parent_id:
            if data.parent_id is None:
                category.parent_id = None
            else:
                if data.parent_id == category.id:
                    raise ValidationError("A category cannot be its own parent")
                if category.subcategories:
                    raise ValidationError("A category with subcategories cannot become a subcategory")
                parent = await self._resolve_parent(data.parent_id)
                category.parent_id = parent.id
                touched.append(parent)

        if "name" in fields and data.name:
            category.name = data.name
        if "description" in fields:
            category.description = data.description
        if "is_private" in fields and data.is_private is not None:
            category.is_private = data.is_private
        if "social_links" in fields:
            category.social_links = data.social_links or None

        try:
            await self.session.flush()
        except IntegrityError:
            raise DuplicateResourceError(f"Category key '{category.key}' already exists")

        await self.session.refresh(category, attribute_names=["parent", "subcategories"])
        await self.session.commit()
        logger.info("Category updated", category_id=str(category.id), fields=sorted(fields))
        touched.extend((category, category.parent))
        await self._invalidate(touched, previous_tags, previous_paths)

        return category

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _resolve_parent(self, parent_id: UUID) -> Category:
        parent = await self.repo.get(parent_id)
        if parent is None:
            raise CategoryNotFoundError(str(parent_id))
        if parent.parent_id is not None:
            raise ValidationError("Subcategories cannot have subcategories of their own")
        return parent

    async def _invalidate(
        self,
        categories: list[Optional[Category]],
        extra_tags: Iterable[str] = (),
        extra_paths: Iterable[str] = (),
    ) -> None:
        if self.cache is None:
            return
        tags, paths = category_targets(categories)
        await self.cache.invalidate(
            [TAG_CATEGORIES, *extra_tags, *tags],
            ["/", *extra_paths, *paths],
        )
