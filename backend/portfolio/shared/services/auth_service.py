"""
Authentication Service

Business logic for credential login.

Login Flow:
===========
    email == ADMIN_EMAIL and password == ADMIN_PASSWORD
        → find or create the admin User row, force role ADMIN
    otherwise
        → stored User with a bcrypt hash that verifies → role from the row
    anything else
        → AuthenticationError (401)

The issued token carries ``user_id``, ``email`` and ``role``; admin-only
routes accept it only when ``role == "ADMIN"``.

Usage:
======
    from portfolio.shared.services.auth_service import AuthService

    service = AuthService(db)
    user, token, expires_in = await service.login_user(email, password)
"""

from datetime import timedelta
from typing import Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.config.settings import settings
from portfolio.shared.core.exceptions import AuthenticationError
from portfolio.shared.core.logging import get_logger
from portfolio.shared.models.enums import UserRole
from portfolio.shared.models.user import User
from portfolio.shared.repositories.user_repository import UserRepository
from portfolio.shared.utils.security import SecurityUtils

logger = get_logger(__name__)


class AuthService:
    """
    Service for authentication-related business logic.

    Attributes:
        session: Database session
        repo: UserRepository instance
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)

    async def login_user(
        self,
        email: str,
        password: str,
    ) -> Tuple[User, str, int]:
        """
        Authenticate a user and generate a token.

        Returns:
            Tuple of (user, access_token, expires_in_seconds)

        Raises:
            AuthenticationError: If credentials are invalid
        """
        email = email.strip().lower()

        if self._is_admin_credentials(email, password):
            user = await self._ensure_admin(email)
        else:
            user = await self.repo.get_by_email(email)
            if not user or not SecurityUtils.verify_password(password, user.password_hash):
                logger.info("Login rejected", email=email)
                raise AuthenticationError("Invalid email or password")

        access_token = self.issue_token(user)
        logger.info("Login succeeded", user_id=str(user.id), role=user.role.value)
        return user, access_token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    def issue_token(self, user: User) -> str:
        return SecurityUtils.create_access_token(
            data={"user_id": str(user.id), "email": user.email, "role": user.role.value},
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )

    def _is_admin_credentials(self, email: str, password: str) -> bool:
        # Both comparisons always run so timing does not reveal which one failed
        email_ok = SecurityUtils.credentials_match(email, settings.ADMIN_EMAIL.strip().lower())
        password_ok = SecurityUtils.credentials_match(password, settings.ADMIN_PASSWORD)
        return email_ok and password_ok

    async def _ensure_admin(self, email: str) -> User:
        user = await self.repo.get_by_email(email)
        if user is None:
            logger.info("Creating admin user", email=email)
            return await self.repo.create(email=email, name="Admin", role=UserRole.ADMIN)
        if user.role != UserRole.ADMIN:
            user.role = UserRole.ADMIN
            await self.session.flush()
        return user
