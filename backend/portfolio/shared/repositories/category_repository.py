"""
Category Repository

Database operations specific to the Category model.

Common Operations:
==================
- get_by_key()       → Find category by its unique key
- key_exists()       → Key availability check used by key generation
- get_subtree()      → Category with subcategories and all media preloaded
- list_top_level()   → Top-level categories with their subcategories
- delete_tree()      → Remove a category, its subcategories, and all owned media

Deletion Order:
===============
delete_tree() issues the statements children-first so foreign keys are
never violated mid-transaction:

    1. images/videos of the subcategories
    2. the subcategories
    3. images/videos of the category itself
    4. the category

The caller owns the transaction (commit or rollback).
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Type, Union
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from portfolio.shared.models.category import Category
from portfolio.shared.models.image import Image
from portfolio.shared.models.video import Video
from portfolio.shared.repositories.base import BaseRepository


@dataclass
class TreeDeletion:
    """Row counts removed by CategoryRepository.delete_tree()."""

    images: int = 0
    videos: int = 0
    subcategories: int = 0


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Category, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_key(self, key: str, *, with_media: bool = False) -> Optional[Category]:
        """
        Get a category by key.

        Args:
            key: Category key, e.g. "summer-wedding"
            with_media: Preload media, parent, and subcategories with their media
        """
        query = select(Category).where(Category.key == key)
        if with_media:
            query = query.options(
                selectinload(Category.images),
                selectinload(Category.videos),
                selectinload(Category.parent),
                selectinload(Category.subcategories).selectinload(Category.images),
                selectinload(Category.subcategories).selectinload(Category.videos),
            )
            query = query.execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def key_exists(self, key: str, exclude_id: Optional[UUID] = None) -> bool:
        query = select(Category.id).where(Category.key == key)
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.first() is not None

    async def get_with_parent(self, category_id: UUID) -> Optional[Category]:
        result = await self.session.execute(
            select(Category)
            .where(Category.id == category_id)
            .options(selectinload(Category.parent), selectinload(Category.subcategories))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_many_with_parents(self, category_ids: Iterable[UUID]) -> list[Category]:
        category_ids = list(category_ids)
        if not category_ids:
            return []
        result = await self.session.execute(
            select(Category)
            .where(Category.id.in_(category_ids))
            .options(selectinload(Category.parent))
        )
        return list(result.scalars().all())

    async def get_subtree(self, category_id: UUID) -> Optional[Category]:
        """
        Load a category with everything a deletion touches.

        Preloads own images and videos, the parent (for cache tags), and
        one level of subcategories with their images and videos.

        SQL Generated (selectinload, one query per relationship):
            SELECT * FROM categories WHERE id = '...'
            SELECT * FROM images WHERE category_id IN (...)
            SELECT * FROM categories WHERE parent_id IN (...)
            ...
        """
        result = await self.session.execute(
            select(Category)
            .where(Category.id == category_id)
            .options(
                selectinload(Category.images),
                selectinload(Category.videos),
                selectinload(Category.parent),
                selectinload(Category.subcategories).selectinload(Category.images),
                selectinload(Category.subcategories).selectinload(Category.videos),
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_top_level(self, *, include_private: bool = True) -> list[Category]:
        """
        List top-level categories ordered by name, subcategories preloaded.

        When include_private is False, private top-level categories are
        excluded; private subcategories are filtered by the caller.
        """
        query = (
            select(Category)
            .where(Category.parent_id.is_(None))
            .options(selectinload(Category.subcategories))
            .order_by(Category.name)
            .execution_options(populate_existing=True)
        )
        if not include_private:
            query = query.where(Category.is_private.is_(False))

        result = await self.session.execute(query)
        return list(result.scalars().all())

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete_tree(
        self,
        category_id: UUID,
        subcategory_ids: Iterable[UUID],
    ) -> TreeDeletion:
        """
        Delete a category, its subcategories, and every media row they own.

        Statements run children-first inside the caller's transaction.
        """
        subcategory_ids = list(subcategory_ids)
        counts = TreeDeletion()

        if subcategory_ids:
            counts.images += await self._delete_media(Image, subcategory_ids)
            counts.videos += await self._delete_media(Video, subcategory_ids)
            result = await self.session.execute(
                delete(Category)
                .where(Category.id.in_(subcategory_ids))
                .execution_options(synchronize_session=False)
            )
            counts.subcategories = result.rowcount or 0

        counts.images += await self._delete_media(Image, [category_id])
        counts.videos += await self._delete_media(Video, [category_id])
        await self.session.execute(
            delete(Category)
            .where(Category.id == category_id)
            .execution_options(synchronize_session=False)
        )
        return counts

    async def _delete_media(self, model: Type[Union[Image, Video]], category_ids: list[UUID]) -> int:
        result = await self.session.execute(
            delete(model)
            .where(model.category_id.in_(category_ids))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
