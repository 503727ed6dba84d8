"""
Portfolio Backend

Photography portfolio API with an admin backend for galleries of images
and videos. Metadata lives in PostgreSQL, binaries live on Cloudinary.

Package Structure:
==================
    portfolio/
    ├── api/        ← FastAPI application
    ├── shared/     ← Shared code (models, services, etc.)
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn portfolio.api.main:app --reload

    # Migrations
    alembic -c backend/alembic.ini upgrade head
"""
