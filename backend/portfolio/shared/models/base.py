"""
Base Model Classes

This module provides the foundational classes for all SQLAlchemy models.
It includes the declarative base and the timestamp mixin.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← Automatic created_at/updated_at

Usage:
======
    from portfolio.shared.models.base import Base, TimestampMixin

    class Image(Base, TimestampMixin):
        __tablename__ = "images"
        id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

Primary keys use the generic ``Uuid`` type: native UUID on PostgreSQL,
CHAR(32) on SQLite (used by the test suite).
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models in the application inherit from this class either
    directly or through TimestampMixin.
    """

    # Free-form dict columns (e.g. category social links)
    type_annotation_map = {
        dict[str, Any]: JSON,
    }


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    - created_at: Set by the database on INSERT via server_default
    - updated_at: Set on INSERT, updated by SQLAlchemy on UPDATE via onupdate
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
