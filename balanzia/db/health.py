"""Database health service for connectivity checks."""

from __future__ import annotations

import time

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from balanzia.domain import HealthStatus

from .interfaces import DatabaseHealthPort


class SQLAlchemyDatabaseHealthService(DatabaseHealthPort):
    """Database health service backed by a lightweight `SELECT 1` query."""

    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_connection_label(self) -> str:
        """Return the target database URL with the password masked."""

        return self._engine.url.render_as_string(hide_password=True)

    def db_check_health(self) -> HealthStatus:
        """Probe the database and report round-trip latency.

        Returns:
            HealthStatus: `ok` status with query latency detail.

        Raises:
            ConnectionError: Raised when the health query fails.
        """

        query_started_at = time.perf_counter()
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1 FROM transaction_record LIMIT 1"))
        except SQLAlchemyError as error:
            raise ConnectionError("transaction store connectivity check failed") from error

        query_duration_ms = int((time.perf_counter() - query_started_at) * 1000)
        return HealthStatus(status="ok", detail=f"transaction store reachable in {query_duration_ms} ms")
