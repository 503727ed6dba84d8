"""
Database Module

Database connectivity and session management for the portfolio backend.

Architecture Overview:
======================
    FastAPI Route
        │  Depends(get_db)
        ▼
    AsyncSession  (one per request, commit on success, rollback on error)
        │
        ▼
    Repositories  (UserRepository, CategoryRepository,
        │          ImageRepository, VideoRepository)
        ▼
    PostgreSQL

Usage:
======
    from portfolio.shared.db import get_db
    from portfolio.shared.repositories import CategoryRepository

    @router.get("/categories/{category_id}")
    async def get_category(category_id: UUID, db: AsyncSession = Depends(get_db)):
        return await CategoryRepository(db).get(category_id)
"""

from portfolio.shared.db.session import (
    get_db,
    init_db,
    check_db,
    close_db,
    build_engine,
    build_session_factory,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "check_db",
    "close_db",
    "build_engine",
    "build_session_factory",
    "AsyncSessionLocal",
    "engine",
]
