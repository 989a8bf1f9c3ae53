"""
Exception hierarchy for idbench.

Every error is fatal for the run that raised it; nothing here is retried.
"""

from __future__ import annotations

from typing import Optional


class IdBenchError(Exception):
    """Base class for all idbench failures."""


class InvalidModeError(IdBenchError, ValueError):
    """Raised when a mode name does not map to a known identifier kind."""

    def __init__(self, value: str, available: Optional[list[str]] = None) -> None:
        self.value = value
        self.available = available or []
        message = f"Unknown mode '{value}'"
        if self.available:
            message += f". Available: {', '.join(self.available)}"
        super().__init__(message)


class DatabaseConnectionError(IdBenchError):
    """Raised when the database handle cannot be opened."""


class StatementPrepareError(IdBenchError):
    """Raised when the insert statement cannot be prepared."""


class InsertError(IdBenchError):
    """Raised when a single insert fails; the run stops at that row."""

    def __init__(self, table: str, index: int, cause: Exception) -> None:
        self.table = table
        self.index = index
        super().__init__(f"Insert of row {index} into {table} failed: {cause}")


class ULIDOverflowError(IdBenchError):
    """Raised when monotonic ULID entropy is exhausted within one millisecond."""


__all__ = [
    "IdBenchError",
    "InvalidModeError",
    "DatabaseConnectionError",
    "StatementPrepareError",
    "InsertError",
    "ULIDOverflowError",
]
