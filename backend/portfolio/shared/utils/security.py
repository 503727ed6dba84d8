"""
Security Utilities

Password hashing, credential comparison and JWT token management.

Password Hashing:
=================
bcrypt through passlib's CryptContext; salts are generated per hash.

Access Tokens:
==============
HS256 JWTs signed with SECRET_KEY (PyJWT). The payload carries the
principal's ``user_id``, ``email`` and ``role``; admin-only routes check
``role == "ADMIN"``.

Usage:
======
    from portfolio.shared.utils.security import SecurityUtils

    token = SecurityUtils.create_access_token(
        data={"user_id": str(user.id), "email": user.email, "role": "ADMIN"},
        secret_key=settings.SECRET_KEY,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    payload = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)
"""

from datetime import datetime, timedelta, timezone
import secrets
from typing import Any, Optional

import jwt
from passlib.context import CryptContext


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)


class SecurityUtils:
    """
    Security utilities for authentication.

    Stateless; every method is a staticmethod.
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORDS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
        """
        Verify a password against a bcrypt hash.

        Users without a stored hash never verify.
        """
        if not hashed_password:
            return False
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def credentials_match(supplied: str, expected: str) -> bool:
        """Constant-time comparison for settings-backed credentials."""
        if not expected:
            return False
        return secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))

    # ═══════════════════════════════════════════════════════════════════════════
    # JWT TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def create_access_token(
        data: dict[str, Any],
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        """
        Create a signed access token.

        Args:
            data: Claims to encode (user_id, email, role)
            secret_key: Signing key
            expires_delta: Lifetime (default: 24 hours)
            algorithm: JWT algorithm

        Returns:
            Encoded JWT string
        """
        issued_at = datetime.now(timezone.utc)
        to_encode = data.copy()
        to_encode.update({
            "exp": issued_at + (expires_delta or timedelta(hours=24)),
            "iat": issued_at,
        })
        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> dict[str, Any]:
        """
        Decode and verify an access token.

        Raises:
            ValueError: If the token is expired or invalid
        """
        try:
            return jwt.decode(token, secret_key, algorithms=[algorithm])
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")
