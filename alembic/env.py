"""Alembic environment: runs migrations against settings.DATABASE_URL (asyncpg)."""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from hr_api.config import settings
from hr_api.database import Base

# Register every model on Base.metadata
import hr_api.announcements.models  # noqa: F401
import hr_api.auth.models  # noqa: F401
import hr_api.benefits.models  # noqa: F401
import hr_api.common.audit  # noqa: F401
import hr_api.core_hr.models  # noqa: F401
import hr_api.documents.models  # noqa: F401
import hr_api.expenses.models  # noqa: F401
import hr_api.goals.models  # noqa: F401
import hr_api.performance.models  # noqa: F401
import hr_api.policies.models  # noqa: F401
import hr_api.projects.models  # noqa: F401
import hr_api.skills.models  # noqa: F401
import hr_api.time_tracking.models  # noqa: F401
import hr_api.training.models  # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a database connection."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
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


async def run_async_migrations() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
