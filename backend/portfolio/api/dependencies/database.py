"""
Database Dependency

FastAPI dependency for database sessions.

The session is committed on success and rolled back on error. Deletion
workflows commit explicitly before returning, so the trailing commit is a
no-op for them.

Usage:
======
    from portfolio.api.dependencies.database import DbSession

    @router.get("/admin/stats")
    async def stats(db: DbSession):
        return await MediaService(db).get_stats()
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Yields:
        AsyncSession: Database session for the current request
    """
    async for session in _get_db():
        yield session


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
