"""
Category Key Generation

Keys are URL-safe identifiers derived from category names. They double as
gallery URLs (``/gallery/<key>``) and Cloudinary folder names.

Rules:
======
    "Summer Wedding!!"   → "summer-wedding"
    taken                → "summer-wedding-1", "summer-wedding-2", ... "-100"
    all 100 taken        → "summer-wedding-1734000000000"  (epoch millis)
    "!!!"                → "category"

The slug is cut so that every candidate, timestamp included, fits the
160-character key column.

The existence check is advisory: two concurrent creators can both see a
key as free. The unique constraint on ``categories.key`` rejects the loser,
which surfaces as a 409.
"""

import re
import time
from typing import Awaitable, Callable

from portfolio.shared.utils.constants import DEFAULT_CATEGORY_KEY, MAX_KEY_LENGTH, MAX_KEY_SUFFIX


_NON_ALNUM = re.compile(r"[^a-z0-9]+")

# Room for "-" plus a 13-digit millisecond timestamp
_MAX_BASE_LENGTH = MAX_KEY_LENGTH - 14


def slugify(name: str) -> str:
    """
    Lowercase, replace runs of non-alphanumerics with a hyphen, trim hyphens.

    Example:
        >>> slugify("  Summer Wedding!! ")
        'summer-wedding'
    """
    slug = _NON_ALNUM.sub("-", name.lower()).strip("-")
    return slug or DEFAULT_CATEGORY_KEY


async def generate_unique_key(
    name: str,
    key_exists: Callable[[str], Awaitable[bool]],
) -> str:
    """
    Derive a key from ``name`` that ``key_exists`` reports as free.

    Args:
        name: Category name
        key_exists: Async predicate, usually CategoryRepository.key_exists

    Returns:
        The slug itself, the slug with the first free numeric suffix
        (1..100), or the slug with a millisecond timestamp suffix.
    """
    base = slugify(name)[:_MAX_BASE_LENGTH].rstrip("-")
    if not await key_exists(base):
        return base

    for suffix in range(1, MAX_KEY_SUFFIX + 1):
        candidate = f"{base}-{suffix}"
        if not await key_exists(candidate):
            return candidate

    return f"{base}-{int(time.time() * 1000)}"
