"""
Route Registration

    /health, /ready, /live  → health checks
    /auth                   → login
    /categories             → list, CRUD, subtree deletion
    /images                 → update, delete, bulk delete, orphan sweep
    /videos                 → update, delete, bulk delete
    /media                  → registration, upload, type-agnostic delete
    /gallery                → public category views
    /admin                  → dashboard stats

Every router except the health checks documents the error envelope for the
statuses it can produce.
"""

from fastapi import FastAPI

from portfolio.api.handlers import (
    auth_handler,
    category_handler,
    gallery_handler,
    health_handler,
    image_handler,
    media_handler,
    video_handler,
)
from portfolio.shared.schemas.common import ErrorResponse

_ERRORS = {
    status: {"model": ErrorResponse}
    for status in (400, 401, 404, 409, 500, 503)
}

_ROUTERS = (
    (auth_handler.router, "/auth", "Authentication"),
    (category_handler.router, "/categories", "Categories"),
    (image_handler.router, "/images", "Images"),
    (video_handler.router, "/videos", "Videos"),
    (media_handler.router, "/media", "Media"),
    (gallery_handler.router, "/gallery", "Gallery"),
    (gallery_handler.admin_router, "/admin", "Admin"),
)


def register_routes(app: FastAPI) -> None:
    app.include_router(health_handler.router, tags=["Health"])
    for router, prefix, tag in _ROUTERS:
        app.include_router(router, prefix=prefix, tags=[tag], responses=_ERRORS)
