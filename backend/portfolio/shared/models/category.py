"""
Category Entity Model

A gallery. Categories form a two-level tree: top-level categories
(parent_id IS NULL) may own subcategories, subcategories own no children.

Model Hierarchy:
================
    Category (top-level)
       ├── images (Image[])
       ├── videos (Video[])
       └── subcategories (Category[])
              ├── images (Image[])
              └── videos (Video[])

Each category key maps to a Cloudinary folder ``<root>/<key>``.

SAMPLE CATEGORY RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ key              │ "summer-wedding"                                          │
│ name             │ "Summer Wedding"                                          │
│ is_private       │ true                                                      │
│ parent_id        │ 660e8400-e29b-41d4-a716-446655440000  (or NULL)           │
│ social_links     │ {"instagram": "https://instagram.com/..."}                │
└──────────────────────────────────────────────────────────────────────────────┘

Rows are never removed through ORM cascades: deletion of a category and
everything it owns is driven by the reconciliation service so that remote
media is cleaned up alongside.
"""

from typing import TYPE_CHECKING, Any, Optional
import uuid

from sqlalchemy import Boolean, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from portfolio.shared.models.image import Image
    from portfolio.shared.models.video import Video


class Category(Base, TimestampMixin):
    """
    Category model.

    Attributes:
        id: Unique identifier (UUID v4)
        key: URL-safe unique key, also the Cloudinary folder name
        name: Human-readable name
        description: Optional description
        is_private: Hidden from visitors when true
        parent_id: Parent category for subcategories
        social_links: Optional map of platform name to URL

    Relationships:
        parent: The parent category (subcategories only)
        subcategories: Direct children
        images: Images owned by this category
        videos: Videos owned by this category
    """

    __tablename__ = "categories"

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # IDENTITY
    # ═══════════════════════════════════════════════════════════════════════════

    # Unique constraint is the authoritative conflict signal for key races
    key: Mapped[str] = mapped_column(
        String(160),
        unique=True,
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    is_private: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    social_links: Mapped[Optional[dict[str, Any]]] = mapped_column(
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    parent_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("categories.id"),
        nullable=True,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    parent: Mapped[Optional["Category"]] = relationship(
        "Category",
        back_populates="subcategories",
        remote_side="Category.id",
    )

    subcategories: Mapped[list["Category"]] = relationship(
        "Category",
        back_populates="parent",
    )

    images: Mapped[list["Image"]] = relationship(
        "Image",
        back_populates="category",
        order_by="Image.order",
    )

    videos: Mapped[list["Video"]] = relationship(
        "Video",
        back_populates="category",
        order_by="Video.order",
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @property
    def is_top_level(self) -> bool:
        return self.parent_id is None

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Category(id={self.id}, key={self.key})>"
