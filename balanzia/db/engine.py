"""Database engine construction for the transaction store.

All SQLAlchemy engine creation goes through this module so connection pool
policy stays identical for the API process, the CLI and migrations.
"""

from __future__ import annotations

import logging

from sqlalchemy import Engine, create_engine

logger = logging.getLogger(__name__)


def db_create_engine(database_url: str, echo_sql: bool = False) -> Engine:
    """Create the SQLAlchemy engine for transaction store access.

    Args:
        database_url: SQLAlchemy database URL.
        echo_sql: Whether SQLAlchemy should log emitted statements.

    Returns:
        Engine: Engine with pre-ping enabled so stale pooled connections are replaced.

    Raises:
        ValueError: Raised when the database URL is blank.
    """

    normalized_url = database_url.strip() if isinstance(database_url, str) else ""
    if not normalized_url:
        raise ValueError("database_url must not be blank")

    engine = create_engine(normalized_url, pool_pre_ping=True, echo=echo_sql)
    logger.info("database engine created target=%s", engine.url.render_as_string(hide_password=True))
    return engine
