"""
Bulk inserter: one connection, one prepared statement, one row at a time.

For each index `i` the inserter generates an identifier, builds the row
`(identifier, "User_<i>")`, and executes the prepared INSERT. Progress is
logged after every insert whose index is a multiple of the progress interval
(index 0 included); a summary line closes a successful run. The first failing
insert aborts the run; rows inserted before it stay committed.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Optional, TypedDict

import psycopg

from idbench.config import get_settings
from idbench.domain.models import Mode, TableSpec, UserRow, table_for
from idbench.errors import InsertError
from idbench.generators import build_generator
from idbench.generators.abstract import IdGenerator
from idbench.infrastructure.db_factory import PreparedInsert, get_sync_connection
from idbench.utils.logging import get_logger

log = get_logger(__name__)

ConnectionFactory = Callable[[], psycopg.Connection]


class InsertResult(TypedDict, total=False):
    """
    Metrics returned by a completed run.
    """

    mode: str
    table: str
    rows: int
    duration_seconds: float
    throughput_rows_per_sec: float
    extra: Dict[str, Any]


class BulkInserter:
    """
    Sequential inserter for a single mode.

    Parameters
    ----------
    mode : Mode | str
        Identifier kind; selects the target table.
    generator : IdGenerator
        Source of identifiers for this run.
    progress_interval : int | None
        Rows between progress lines. Defaults to settings.bench_progress_interval.
    connect : callable | None
        Zero-argument connection factory. Defaults to `get_sync_connection`.
    dsn_override : str | None
        DSN used by the default connection factory.
    """

    def __init__(
        self,
        mode: Mode | str,
        generator: IdGenerator,
        progress_interval: Optional[int] = None,
        connect: Optional[ConnectionFactory] = None,
        dsn_override: Optional[str] = None,
    ) -> None:
        self.mode = Mode.parse(mode)
        self.table: TableSpec = table_for(self.mode)
        self.generator = generator
        self.progress_interval = progress_interval or get_settings().bench_progress_interval
        if self.progress_interval <= 0:
            raise ValueError("progress_interval must be positive")
        self._connect = connect or (lambda: get_sync_connection(dsn_override))

    def execute(self, total_count: int) -> InsertResult:
        """
        Insert `total_count` rows and return basic metrics.

        Raises
        ------
        DatabaseConnectionError, StatementPrepareError, InsertError
            On the first failure; no retry.
        """
        if total_count < 0:
            raise ValueError(f"total_count must be non-negative, got {total_count}")

        mode = self.mode.value
        table = self.table.name
        conn = self._connect()
        try:
            with PreparedInsert(conn, self.table) as stmt:
                start = time.perf_counter()
                for i in range(total_count):
                    key = self.generator.next_id()
                    try:
                        stmt.execute(UserRow.for_index(key, i).as_params())
                    except psycopg.Error as exc:
                        log.error(
                            f"Insert failed at row {i} ({mode})",
                            extra={"mode": mode, "table": table, "index": i},
                        )
                        raise InsertError(table, i, exc) from exc
                    if i % self.progress_interval == 0:
                        log.info(
                            f"Inserted {i + 1} {mode} rows",
                            extra={"mode": mode, "table": table, "inserted": i + 1},
                        )
                duration = time.perf_counter() - start
        finally:
            conn.close()

        throughput = total_count / duration if duration > 0 else 0.0
        log.info(
            f"Inserted {total_count} rows into {table} ({mode}) in {duration:.2f}s",
            extra={
                "mode": mode,
                "table": table,
                "rows": total_count,
                "duration_seconds": duration,
            },
        )
        return InsertResult(
            mode=mode,
            table=table,
            rows=total_count,
            duration_seconds=duration,
            throughput_rows_per_sec=throughput,
            extra=self.generator.describe(),
        )


def run(
    mode: Mode | str,
    total_count: int,
    generator: Optional[IdGenerator] = None,
    connect: Optional[ConnectionFactory] = None,
    dsn_override: Optional[str] = None,
) -> InsertResult:
    """
    Insert `total_count` rows of `mode`.

    The mode is resolved before anything else, so an unknown mode fails
    without touching the database.
    """
    resolved = Mode.parse(mode)
    if total_count < 0:
        raise ValueError(f"total_count must be non-negative, got {total_count}")
    inserter = BulkInserter(
        resolved,
        generator or build_generator(resolved),
        connect=connect,
        dsn_override=dsn_override,
    )
    return inserter.execute(total_count)


__all__ = ["BulkInserter", "InsertResult", "run"]
