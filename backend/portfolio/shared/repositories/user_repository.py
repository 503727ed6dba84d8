"""
User Repository

Database operations specific to the User model.

Common Operations:
==================
- get_by_email()   → Find user by email address
- email_exists()   → Check if email is already registered
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.shared.models.user import User
from portfolio.shared.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address (case-insensitive).

        SQL Generated:
            SELECT * FROM users WHERE lower(email) = 'admin@portfolio.dev'
        """
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None
