"""Alembic environment — runs Townsquare migrations on the async engine.

The database URL comes from townsquare.config.Settings (DATABASE_URL, with
postgresql:// already rewritten for asyncpg), so migrations and the API can
never point at different databases. alembic.ini's sqlalchemy.url is only a
placeholder for tooling that reads the ini directly.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

from townsquare.config import get_settings
from townsquare.db.base import Base
import townsquare.models  # noqa: F401  (registers every table on Base.metadata)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
database_url = get_settings().database_url


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata, compare_type=True, **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online() -> None:
    engine = create_async_engine(database_url, poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(
            lambda sync_conn: _configure(connection=sync_conn),
        )
    await engine.dispose()


if context.is_offline_mode():
    _configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_migrate_online())
