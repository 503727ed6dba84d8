"""
Enums used across the application.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role carried by a user and copied into their access token."""

    ADMIN = "ADMIN"
    USER = "USER"


class MediaType(str, Enum):
    """
    Kind of media row.

    The value doubles as the Cloudinary ``resource_type`` used when
    uploading or destroying the remote object.
    """

    IMAGE = "image"
    VIDEO = "video"
