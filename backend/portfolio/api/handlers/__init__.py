"""
API Handlers

Route handlers for the portfolio API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer; errors propagate as
PortfolioException subclasses and are rendered by the global handlers.
"""

from portfolio.api.handlers import (
    auth_handler,
    category_handler,
    gallery_handler,
    health_handler,
    image_handler,
    media_handler,
    video_handler,
)

__all__ = [
    "auth_handler",
    "category_handler",
    "gallery_handler",
    "health_handler",
    "image_handler",
    "media_handler",
    "video_handler",
]
