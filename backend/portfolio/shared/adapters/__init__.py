"""
Adapters Package

External service integrations.

Contents:
=========
- cloudinary_adapter: Remote media storage (upload, delete, folders, listing)
- redis_adapter: Response cache and invalidation channel

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from portfolio.shared.adapters.cloudinary_adapter import CloudinaryAdapter
    from portfolio.shared.adapters.redis_adapter import RedisAdapter
"""
