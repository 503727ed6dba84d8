"""
Image Entity Model

A photograph stored in Cloudinary and catalogued locally.

The local row is the source of truth for what the gallery shows; the
remote object is referenced by ``cloudinary_id`` (the Cloudinary
public_id). A row without a remote reference can exist (metadata-only
registrations), and a remote object without a row is an orphan the
sync endpoint cleans up.

SAMPLE IMAGE RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ title            │ "First dance"                                             │
│ cloudinary_id    │ "portfolio/summer-wedding/abc123"                         │
│ url              │ "https://res.cloudinary.com/demo/image/upload/..."        │
│ width / height   │ 4000 / 2667                                               │
│ is_header        │ false                                                     │
│ order            │ 3                                                         │
│ category_id      │ 660e8400-e29b-41d4-a716-446655440000                      │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from portfolio.shared.models.category import Category


class Image(Base, TimestampMixin):
    """
    Image model.

    Attributes:
        id: Unique identifier (UUID v4)
        title: Display title
        description: Optional caption
        cloudinary_id: Remote public_id, NULL when never uploaded
        url: Delivery URL
        width, height, format, bytes: Asset properties reported on upload
        is_header: Used as the gallery header image
        order: Position inside the category
        category_id: Owning category
    """

    __tablename__ = "images"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # REMOTE ASSET
    # ═══════════════════════════════════════════════════════════════════════════

    cloudinary_id: Mapped[Optional[str]] = mapped_column(
        String(512),
        nullable=True,
        index=True,
    )

    url: Mapped[str] = mapped_column(Text, nullable=False)
    width: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    height: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    format: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    bytes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # PLACEMENT
    # ═══════════════════════════════════════════════════════════════════════════

    is_header: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )

    category: Mapped["Category"] = relationship("Category", back_populates="images")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Image(id={self.id}, cloudinary_id={self.cloudinary_id})>"
