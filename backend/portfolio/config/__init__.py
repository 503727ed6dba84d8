"""
Configuration Module

Application configuration loaded from environment variables.

Usage:
======
    from portfolio.config.settings import settings

    db_url = settings.DATABASE_URL
    folder = settings.CLOUDINARY_ROOT_FOLDER
"""

from portfolio.config.settings import settings, get_settings, Settings

__all__ = [
    "settings",
    "get_settings",
    "Settings",
]
