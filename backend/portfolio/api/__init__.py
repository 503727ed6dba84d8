"""
Portfolio API

HTTP surface of the portfolio backend: admin catalogue management,
Cloudinary-backed uploads and deletions, public gallery pages.

Package Structure:
==================
    api/
    ├── main.py           ← create_application(), lifespan, request ids
    ├── routes.py         ← router table and documented error statuses
    ├── dependencies/     ← db session, admin auth, request bodies, services
    ├── handlers/         ← categories, images, videos, media, gallery
    └── middleware/       ← error envelope rendering

Admin routes resolve AdminUser before reading a request body.

Usage:
======
    uvicorn portfolio.api.main:app --reload
"""
