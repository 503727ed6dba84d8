"""
Shared Module

Everything below the HTTP layer:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Business logic layer (reconciliation engine included)
- Schemas: Pydantic request/response models
- Core: Logging, exceptions
- Adapters: Cloudinary and Redis

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← External services
    ├── migrations/     ← Alembic environment and revisions
    └── utils/          ← Security, key generation, constants

Usage:
======
    from portfolio.shared.models import Category, Image
    from portfolio.shared.repositories import CategoryRepository
    from portfolio.shared.services import ReconciliationService
    from portfolio.shared.schemas import BulkDeleteRequest
    from portfolio.shared.core import logger, PortfolioException
"""
