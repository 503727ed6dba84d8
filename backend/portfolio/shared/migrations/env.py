# pylint: skip-file
# ruff: noqa
"""
Alembic environment for the portfolio schema.

The database URL comes from settings, so alembic.ini holds no credentials.
Online migrations run through the async engine; ``alembic upgrade head --sql``
renders the SQL without connecting.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from portfolio.config.settings import settings
from portfolio.shared.models import Base, Category, Image, User, Video

# Tables register on Base.metadata when their model module is imported.
MODELS = (User, Category, Image, Video)

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _configure(**options) -> None:
    context.configure(target_metadata=Base.metadata, **options)
    with context.begin_transaction():
        context.run_migrations()


def _run_on(connection: Connection) -> None:
    _configure(connection=connection, compare_type=True, compare_server_default=True)


async def _run_online() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_on)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_run_online())
