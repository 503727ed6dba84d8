"""
Base Repository

Operations every portfolio entity needs, bound to one model class.

Provided:
=========
- get(id)            → one row or None
- exists(id)         → presence check without loading the row
- count(*criteria)   → row count, optionally filtered by SQL expressions
- create(**fields)   → insert, flush, refresh
- delete_by_ids()    → one DELETE ... WHERE id IN (...)

Subclassing:
============
    class ImageRepository(MediaRepository[Image]):
        def __init__(self, session: AsyncSession):
            super().__init__(Image, session)

Transactions:
=============
Nothing here commits. get_db() commits at the end of a request; the
deletion workflows commit themselves once their local step succeeds.
"""

from typing import Any, Generic, Iterable, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.shared.models.base import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Shared data access for one model.

    Attributes:
        model: Mapped class this repository reads and writes
        session: Request-scoped async session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        SQL Generated:
            SELECT * FROM images WHERE id = '550e8400-...'
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def exists(self, record_id: UUID) -> bool:
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == record_id).limit(1)
        )
        return result.first() is not None

    async def count(self, *criteria: ColumnElement[bool]) -> int:
        """
        Count rows matching every expression in ``criteria``.

        Example:
            private = await categories.count(Category.is_private.is_(True))
        """
        query = select(func.count()).select_from(self.model)
        if criteria:
            query = query.where(*criteria)
        result = await self.session.execute(query)
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **fields: Any) -> ModelType:
        """
        Insert a row and return it with server defaults loaded.

        Raises:
            sqlalchemy.exc.IntegrityError: Unique or foreign key violation
        """
        instance = self.model(**fields)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete_by_ids(self, ids: Iterable[UUID]) -> int:
        """
        Remove rows in a single statement; returns how many went.

        Ids with no row are ignored.

        SQL Generated:
            DELETE FROM images WHERE id IN ('uuid1', 'uuid2', ...)
        """
        ids = list(ids)
        if not ids:
            return 0

        result = await self.session.execute(
            delete(self.model)
            .where(self.model.id.in_(ids))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
