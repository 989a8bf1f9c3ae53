"""
Pytest configuration for idbench.

Provides fixtures for:
- In-memory fake connections (unit tests, no database needed)
- Database connection management and schema setup (integration tests)
- Settings override for integration tests
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Generator, List, Optional, Tuple

import psycopg
import pytest

from idbench.config import Settings

USERS_TABLES = ("users_uuid", "users_snowflake", "users_ulid")


class FakeCursor:
    """Cursor double that records PREPARE / EXECUTE / DEALLOCATE calls."""

    def __init__(self, db: "FakeDatabase") -> None:
        self.db = db
        self.closed = False

    def execute(self, query: Any, params: Optional[Tuple[Any, ...]] = None) -> None:
        if self.closed:
            raise RuntimeError("cursor is closed")
        text = repr(query)
        if "PREPARE" in text and "DEALLOCATE" not in text:
            if self.db.fail_prepare:
                raise psycopg.errors.UndefinedTable("relation does not exist")
            self.db.prepares += 1
        elif "DEALLOCATE" in text:
            self.db.deallocates += 1
        elif "EXECUTE" in text:
            if self.db.prepares == 0:
                raise psycopg.errors.InvalidSqlStatementName("statement is not prepared")
            if self.db.fail_at is not None and len(self.db.rows) == self.db.fail_at:
                raise psycopg.OperationalError("server closed the connection unexpectedly")
            self.db.rows.append(tuple(params or ()))
        self.db.queries.append(text)

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class FakeConnection:
    def __init__(self, db: "FakeDatabase") -> None:
        self.db = db
        self.closed = False
        self.cursors: List[FakeCursor] = []

    def cursor(self) -> FakeCursor:
        if self.closed:
            raise psycopg.InterfaceError("the connection is closed")
        cursor = FakeCursor(self.db)
        self.cursors.append(cursor)
        return cursor

    def close(self) -> None:
        self.closed = True


class FakeDatabase:
    """
    Shared state behind FakeConnection; `connect` is the connection factory.
    """

    def __init__(self, fail_at: Optional[int] = None, fail_prepare: bool = False) -> None:
        self.fail_at = fail_at
        self.fail_prepare = fail_prepare
        self.rows: List[Tuple[Any, ...]] = []
        self.queries: List[str] = []
        self.prepares = 0
        self.deallocates = 0
        self.connections: List[FakeConnection] = []

    def connect(self) -> FakeConnection:
        conn = FakeConnection(self)
        self.connections.append(conn)
        return conn


@pytest.fixture
def fake_db_factory() -> Callable[..., FakeDatabase]:
    """Build a FakeDatabase, optionally failing at a row index or on PREPARE."""
    return FakeDatabase


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "idbench"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped autocommit connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn, autocommit=True)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def db_schema_initialized(db_connection: psycopg.Connection) -> bool:
    """
    Apply db/init.sql (idempotent) so the users_* tables exist.
    """
    init_sql_path = Path(__file__).parent.parent / "db" / "init.sql"
    with db_connection.cursor() as cur:
        cur.execute(init_sql_path.read_text(encoding="utf-8"))
    return True


@pytest.fixture(scope="function")
def clean_users_tables(db_connection: psycopg.Connection, db_schema_initialized: bool):
    """
    Empty the users_* tables before and after each test function.
    """
    statement = f"TRUNCATE TABLE {', '.join(USERS_TABLES)} RESTART IDENTITY;"
    with db_connection.cursor() as cur:
        cur.execute(statement)
    yield
    with db_connection.cursor() as cur:
        cur.execute(statement)
