"""Alembic environment for the telemetry store schema.

The database URL always comes from runtime settings, never from `alembic.ini`.
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

import logging
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import make_url

from fleet_telemetry.config import config_load_database_url

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

store_database_url = config_load_database_url()
config.set_main_option("sqlalchemy.url", store_database_url.replace("%", "%%"))

# Schema is owned by hand-written revisions only.
target_metadata = None


def run_migrations_offline() -> None:
    """Emit telemetry store migration SQL without a live connection."""

    logger.info("rendering telemetry store migrations for %s", make_url(store_database_url).render_as_string())
    context.configure(
        url=store_database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply telemetry store migrations over one connection."""

    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    logger.info("applying telemetry store migrations on %s", connectable.url.render_as_string())

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
