"""
Application constants that are not environment-configurable.
"""

# Category keys
DEFAULT_CATEGORY_KEY = "category"
MAX_KEY_SUFFIX = 100
MAX_KEY_LENGTH = 160

# Failure reasons reported per media item by deletion workflows
REASON_NO_REMOTE_ID = "no-remote-id"
REASON_REMOTE_DELETE_FAILED = "remote-delete-failed"

# Video thumbnails generated eagerly on upload
VIDEO_THUMBNAIL_TRANSFORMATION = {
    "width": 400,
    "height": 300,
    "crop": "fill",
    "format": "jpg",
    "start_offset": "1",
}

# Cache tags
TAG_MEDIA = "media"
TAG_CATEGORIES = "categories"
TAG_IMAGES = "images"
TAG_VIDEOS = "videos"
GALLERY_TAG_PREFIX = "gallery-"

