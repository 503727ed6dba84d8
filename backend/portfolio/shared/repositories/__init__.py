"""
Repository Pattern Implementations

Repositories encapsulate database queries behind a small async API.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]        ← Generic CRUD + batch delete
         │
         ├── UserRepository          ← Lookup by e-mail
         ├── CategoryRepository      ← Keys, subtree loading, tree deletion
         └── MediaRepository
                ├── ImageRepository
                └── VideoRepository

Usage Example:
==============
    from portfolio.shared.repositories import CategoryRepository, ImageRepository

    category = await CategoryRepository(db).get_subtree(category_id)
    refs = await ImageRepository(db).get_remote_refs(image_ids)
"""

from portfolio.shared.repositories.base import BaseRepository
from portfolio.shared.repositories.user_repository import UserRepository
from portfolio.shared.repositories.category_repository import CategoryRepository, TreeDeletion
from portfolio.shared.repositories.media_repository import (
    MediaRepository,
    ImageRepository,
    VideoRepository,
    RemoteRef,
    media_repository,
)

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "UserRepository",
    "CategoryRepository",
    "MediaRepository",
    "ImageRepository",
    "VideoRepository",
    # Value types
    "TreeDeletion",
    "RemoteRef",
    "media_repository",
]
