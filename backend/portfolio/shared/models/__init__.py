"""
Portfolio SQLAlchemy Models

Model Hierarchy:
================
    User

    Category (top-level, parent_id IS NULL)
       ├── images (Image[])
       ├── videos (Video[])
       └── subcategories (Category[])
              ├── images (Image[])
              └── videos (Video[])

Models Overview:
================
- Base: Declarative base and timestamp mixin
- User: Principal able to sign in (admin or regular user)
- Category: Gallery, at most two levels deep
- Image: Photograph catalogued locally, stored in Cloudinary
- Video: Video catalogued locally, stored in Cloudinary

Usage:
======
    from portfolio.shared.models import Category, Image, Video

    category = await repo.get_subtree(category_id)
    category.subcategories  # Direct children
    category.images         # Own images, ordered
"""

from portfolio.shared.models.base import Base, TimestampMixin
from portfolio.shared.models.enums import MediaType, UserRole
from portfolio.shared.models.user import User
from portfolio.shared.models.category import Category
from portfolio.shared.models.image import Image
from portfolio.shared.models.video import Video

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    # Enums
    "MediaType",
    "UserRole",
    # Models
    "User",
    "Category",
    "Image",
    "Video",
]
