"""
Database connection factory utilities for idbench.

Opens the single autocommit connection a run uses and manages the server-side
prepared INSERT statement bound to it. Nothing here retries: a failure to
connect or prepare is fatal for the run.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import psycopg
from psycopg import sql

from idbench.config import Settings, get_settings
from idbench.domain.models import TableSpec
from idbench.errors import DatabaseConnectionError, StatementPrepareError
from idbench.utils.logging import get_logger

log = get_logger(__name__)


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings (or return DATABASE_URL as-is)."""
    settings = settings or get_settings()
    if settings.database_url:
        return settings.database_url
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def get_sync_connection(dsn_override: Optional[str] = None) -> psycopg.Connection:
    """
    Open a dedicated autocommit connection.

    Every statement commits on its own, so a run that fails halfway keeps the
    rows inserted before the failure. Parameters are bound client-side
    (`ClientCursor`) because the inserts go through `EXECUTE`, which does not
    accept server-side bind parameters.

    Raises
    ------
    DatabaseConnectionError
        If the connection cannot be opened.
    """
    settings = get_settings()
    dsn = dsn_override or build_dsn(settings)
    try:
        return psycopg.connect(
            dsn,
            autocommit=True,
            cursor_factory=psycopg.ClientCursor,
            connect_timeout=settings.db_connect_timeout,
        )
    except psycopg.Error as exc:
        raise DatabaseConnectionError(f"Could not connect to database: {exc}") from exc


class PreparedInsert:
    """
    Server-side prepared `INSERT INTO <table> (<key>, name) VALUES ($1, $2)`.

    Prepared once on enter, executed once per row, deallocated on exit.

    Example
    -------
        with PreparedInsert(conn, table) as stmt:
            stmt.execute((key, "User_0"))
    """

    def __init__(self, conn: psycopg.Connection, table: TableSpec) -> None:
        self.conn = conn
        self.table = table
        self.name = table.statement_name
        self._cursor: Any = None
        self.executions = 0

    def prepare(self) -> None:
        query = sql.SQL("PREPARE {} AS INSERT INTO {} ({}, name) VALUES ($1, $2)").format(
            sql.Identifier(self.name),
            sql.Identifier(self.table.name),
            sql.Identifier(self.table.key_column),
        )
        cursor = self.conn.cursor()
        try:
            cursor.execute(query)
        except psycopg.Error as exc:
            cursor.close()
            raise StatementPrepareError(
                f"Could not prepare insert for {self.table.name}: {exc}"
            ) from exc
        self._cursor = cursor
        log.debug(f"Prepared {self.name}", extra={"table": self.table.name})

    def execute(self, params: Sequence[Any]) -> None:
        if self._cursor is None:
            raise RuntimeError(f"Statement {self.name} is not prepared")
        self._cursor.execute(
            sql.SQL("EXECUTE {} (%s, %s)").format(sql.Identifier(self.name)), params
        )
        self.executions += 1

    def close(self) -> None:
        """Deallocate the statement and close its cursor (idempotent)."""
        cursor, self._cursor = self._cursor, None
        if cursor is None:
            return
        try:
            if not self.conn.closed:
                cursor.execute(sql.SQL("DEALLOCATE {}").format(sql.Identifier(self.name)))
        except psycopg.Error as exc:
            # Closing the connection drops the statement anyway.
            log.warning(f"Could not deallocate {self.name}: {exc}")
        finally:
            cursor.close()

    def __enter__(self) -> "PreparedInsert":
        self.prepare()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = [
    "PreparedInsert",
    "build_dsn",
    "get_sync_connection",
]
