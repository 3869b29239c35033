import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context

from food_delivery_api.config import get_settings
from food_delivery_api.db.base import Base
import food_delivery_api.models  # noqa: F401  регистрирует таблицы в Base.metadata

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# драйверы offline-режима: SQL генерируется без подключения
SYNC_DRIVERS = {"asyncpg": "psycopg2", "aiosqlite": "pysqlite"}


def get_database_url() -> str:
    """
    URL базы: `alembic -x db_url=...` важнее DATABASE_URL из настроек.
    """
    return context.get_x_argument(as_dictionary=True).get("db_url") or get_settings().DATABASE_URL


def configure_options(url) -> dict:
    # SQLite не умеет ALTER COLUMN, поэтому миграции идут через batch
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": url.get_backend_name() == "sqlite",
    }


def run_migrations_offline():
    """Offline mode: печатает SQL для синхронного драйвера."""
    url = make_url(get_database_url())
    driver = SYNC_DRIVERS.get(url.get_driver_name())
    if driver:
        url = url.set(drivername=f"{url.get_backend_name()}+{driver}")

    context.configure(
        url=url.render_as_string(hide_password=False),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **configure_options(url),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    """Синхронный запуск миграций в online-режиме."""
    context.configure(connection=connection, **configure_options(connection.engine.url))

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online():
    """Async → sync через run_sync, движок закрывается после миграций."""
    connectable = create_async_engine(get_database_url(), poolclass=pool.NullPool)

    try:
        async with connectable.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
