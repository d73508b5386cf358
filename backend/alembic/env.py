"""
Alembic Migration Environment
===============================

What:  Migrates the folders/tags/notes schema for whatever DATABASE_URL the
       application itself would use.
How:   Online mode borrows a `Database` handle (NullPool, so the CLI leaves no
       pooled connections behind) and runs the revision scripts through
       connection.run_sync(). Offline mode renders SQL for review.
When:  `alembic upgrade head` from the backend/ directory.

SQLite URLs switch on batch mode, since SQLite cannot ALTER most constraints
in place.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection

from noteful.config import settings
from noteful.database import Base, Database
import noteful.models  # noqa: F401  (registers tables on Base.metadata)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=settings.is_sqlite,
        **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    database = Database(settings.database_url, poolclass=pool.NullPool)
    try:
        async with database.engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await database.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
