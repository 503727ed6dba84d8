"""
Utilities Package

Contents:
=========
- security: Password hashing, credential comparison, JWT management
- keys: Category key derivation
- constants: Application constants

Usage:
======
    from portfolio.shared.utils.security import SecurityUtils
    from portfolio.shared.utils.keys import generate_unique_key
"""

from portfolio.shared.utils.security import SecurityUtils
from portfolio.shared.utils.keys import slugify, generate_unique_key

__all__ = [
    "SecurityUtils",
    "slugify",
    "generate_unique_key",
]
