"""Alembic environment for the perfreview schema.

The URL comes from ``DATABASE_URL`` via Settings, never from alembic.ini.
"""

import asyncio
import logging
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from perfreview.config import settings
from perfreview.database import Base, split_ssl_options
from perfreview.models import ConsensusRow, Cycle, EvaluationRow, PDIPlanRow  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

db_url, connect_args = split_ssl_options(settings.database_url)
target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    # JSONB and CHECK changes on the review tables should show up in autogenerate
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)
    with context.begin_transaction():
        context.run_migrations()


def migrate_offline() -> None:
    """Emit SQL for the review tables without a live connection."""
    _configure(url=db_url, literal_binds=True, dialect_opts={"paramstyle": "named"})


def _migrate_with(connection: Connection) -> None:
    _configure(connection=connection)


async def migrate_online() -> None:
    engine = create_async_engine(db_url, poolclass=pool.NullPool, connect_args=connect_args)
    logger.info("Migrating review schema on %s", engine.url.render_as_string(hide_password=True))
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate_with)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    migrate_offline()
else:
    asyncio.run(migrate_online())
