"""
Evidence Manager - Alembic Migration Environment
Supports both sync (autogenerate) and async (upgrade/downgrade) modes.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from core.database.models import Base
from core.database.session import get_async_database_url

# Alembic Config object
config = context.config

# DATABASE_URL / POSTGRES_* decide the target, never alembic.ini
config.set_main_option("sqlalchemy.url", get_async_database_url())

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Target metadata for autogenerate
target_metadata = Base.metadata


def sync_url(url: str) -> str:
    """Driver-less URL for the synchronous autogenerate engine."""
    return url.replace("+asyncpg", "").replace("+aiosqlite", "")


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode, emitting SQL to the script output."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online_sync() -> None:
    """Run migrations using synchronous engine (for autogenerate)."""
    connectable = create_engine(
        sync_url(config.get_main_option("sqlalchemy.url")),
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        do_run_migrations(connection)


async def run_async_migrations() -> None:
    """Run migrations in async mode."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode.

    Uses sync engine for autogenerate operations,
    async engine for upgrade/downgrade operations.
    """
    is_autogenerate = getattr(context.config.cmd_opts, "autogenerate", False)

    if is_autogenerate:
        run_migrations_online_sync()
    else:
        asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
