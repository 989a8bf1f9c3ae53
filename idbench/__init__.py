"""
idbench - bulk identifier insertion benchmark for PostgreSQL secondary indexes.

Inserts synthetic `users_*` rows keyed by one of three identifier kinds so the
resulting index layout can be compared:

- Random v4 UUIDs (unordered)
- Snowflake-style 64-bit ids (time-ordered per node)
- Monotonic ULIDs (time-ordered, lexicographically sortable)

Each run uses one connection and one prepared INSERT, writes rows one at a
time, and stops at the first failure.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from idbench.config import Settings, get_settings
from idbench.domain.models import Mode, TableSpec, UserRow
from idbench.errors import (
    DatabaseConnectionError,
    IdBenchError,
    InsertError,
    InvalidModeError,
    StatementPrepareError,
    ULIDOverflowError,
)
from idbench.generators import IdGenerator, available_modes, build_generator
from idbench.inserter import BulkInserter, InsertResult, run
from idbench.orchestrator import RunConfig, run_benchmark
from idbench.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Mode",
    "TableSpec",
    "UserRow",
    # Errors
    "IdBenchError",
    "InvalidModeError",
    "DatabaseConnectionError",
    "StatementPrepareError",
    "InsertError",
    "ULIDOverflowError",
    # Generators
    "IdGenerator",
    "available_modes",
    "build_generator",
    # Insertion
    "BulkInserter",
    "InsertResult",
    "run",
    "RunConfig",
    "run_benchmark",
    # Logging
    "configure_logging",
    "get_logger",
]
