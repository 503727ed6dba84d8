# pylint: skip-file
# ruff: noqa
"""Initial schema - users, categories, images, videos

Revision ID: 001
Revises:
Create Date: 2026-03-01 00:00:00

Tables created:
- users: Principals able to sign in
- categories: Two-level gallery tree (parent_id → categories.id)
- images: Photographs, referenced in Cloudinary by cloudinary_id
- videos: Videos, same placement columns plus playback properties

Enums created:
- userrole: ADMIN, USER
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


user_role_enum = postgresql.ENUM("ADMIN", "USER", name="userrole", create_type=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def _media_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("cloudinary_id", sa.String(512), nullable=True, index=True),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("width", sa.Integer(), nullable=True),
        sa.Column("height", sa.Integer(), nullable=True),
        sa.Column("format", sa.String(20), nullable=True),
        sa.Column("bytes", sa.Integer(), nullable=True),
        sa.Column("is_header", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "category_id",
            sa.Uuid(),
            sa.ForeignKey("categories.id"),
            nullable=False,
            index=True,
        ),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    op.execute("CREATE TYPE userrole AS ENUM ('ADMIN', 'USER')")

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True, index=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("password_hash", sa.Text(), nullable=True),
        sa.Column("role", user_role_enum, nullable=False, server_default="USER"),
        *_timestamps(),
    )

    op.create_table(
        "categories",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("key", sa.String(160), nullable=False, unique=True, index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_private", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("social_links", sa.JSON(), nullable=True),
        sa.Column(
            "parent_id",
            sa.Uuid(),
            sa.ForeignKey("categories.id"),
            nullable=True,
            index=True,
        ),
        *_timestamps(),
    )

    op.create_table("images", *_media_columns(), *_timestamps())

    op.create_table(
        "videos",
        *_media_columns(),
        sa.Column("duration", sa.Float(), nullable=True),
        sa.Column("thumbnail_url", sa.Text(), nullable=True),
        sa.Column("bitrate", sa.Integer(), nullable=True),
        sa.Column("frame_rate", sa.Float(), nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("videos")
    op.drop_table("images")
    op.drop_table("categories")
    op.drop_table("users")
    op.execute("DROP TYPE IF EXISTS userrole")
