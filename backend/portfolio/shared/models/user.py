"""
User Entity Model

Represents a principal able to sign in. The site administrator is created
on first successful login with the configured admin credentials.

SAMPLE USER RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 550e8400-e29b-41d4-a716-446655440000                      │
│ email            │ "admin@portfolio.dev"                                     │
│ name             │ "Admin"                                                   │
│ role             │ ADMIN                                                     │
│ password_hash    │ NULL  (admin password lives in settings)                  │
└──────────────────────────────────────────────────────────────────────────────┘
"""

from typing import Optional
import uuid

from sqlalchemy import Enum as SQLEnum, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.shared.models.base import Base, TimestampMixin
from portfolio.shared.models.enums import UserRole


class User(Base, TimestampMixin):
    """
    User model.

    Attributes:
        id: Unique identifier (UUID v4)
        email: Login e-mail (unique, indexed)
        name: Display name
        password_hash: Bcrypt hash, NULL for the settings-backed admin
        role: ADMIN or USER
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    password_hash: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, name="userrole"),
        nullable=False,
        default=UserRole.USER,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
