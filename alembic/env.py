"""Alembic entrypoint for the transaction store schema.

The database URL always comes from `DATABASE_URL` (or `.env`) through the
service settings loader, never from `alembic.ini`.
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from balanzia.config import config_load_database_url

alembic_config = context.config

if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name, disable_existing_loggers=False)

# Schema is maintained as hand-written revisions; there is no ORM metadata to diff.
_MIGRATION_OPTIONS = {"target_metadata": None, "compare_type": True}


def migrate_transaction_store_offline(database_url: str) -> None:
    """Render revision SQL for `database_url` to stdout."""

    context.configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_MIGRATION_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def migrate_transaction_store_online(database_url: str) -> None:
    """Apply pending revisions over a single unpooled connection."""

    migration_engine = create_engine(database_url, poolclass=pool.NullPool)
    try:
        with migration_engine.connect() as connection:
            context.configure(connection=connection, **_MIGRATION_OPTIONS)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        migration_engine.dispose()


if context.is_offline_mode():
    migrate_transaction_store_offline(config_load_database_url())
else:
    migrate_transaction_store_online(config_load_database_url())
