"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from portfolio.shared.core.logging import logger, get_logger
    from portfolio.shared.core.exceptions import PortfolioException, NotFoundError

    logger.info("Image deleted", image_id=image_id)
"""

from portfolio.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from portfolio.shared.core.exceptions import (
    PortfolioException,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    CategoryNotFoundError,
    MediaNotFoundError,
    ValidationError,
    ConflictError,
    DuplicateResourceError,
    PersistenceError,
    ServiceUnavailableError,
    ExternalServiceError,
    MediaStoreError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "PortfolioException",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "CategoryNotFoundError",
    "MediaNotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateResourceError",
    "PersistenceError",
    "ServiceUnavailableError",
    "ExternalServiceError",
    "MediaStoreError",
]
