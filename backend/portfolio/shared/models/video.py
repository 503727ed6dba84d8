"""
Video Entity Model

A video stored in Cloudinary (resource_type "video") and catalogued
locally. Same placement rules as Image, plus playback properties and
the eager thumbnail generated on upload.
"""

from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio.shared.models.base import Base, TimestampMixin


if TYPE_CHECKING:
    from portfolio.shared.models.category import Category


class Video(Base, TimestampMixin):
    """
    Video model.

    Attributes:
        duration: Seconds
        thumbnail_url: Eager 400x300 jpg generated at upload
        bitrate, frame_rate: Playback properties reported on upload
    """

    __tablename__ = "videos"

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
    duration: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    bitrate: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    frame_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

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

    category: Mapped["Category"] = relationship("Category", back_populates="videos")

    def __repr__(self) -> str:
        return f"<Video(id={self.id}, cloudinary_id={self.cloudinary_id})>"
