"""
Domain package for idbench.

Exports the identifier modes, table descriptions, and the row model shared by
the generators, the inserter, and the orchestrator.
"""

from idbench.domain.models import TABLES, Mode, TableSpec, UserRow, table_for

__all__ = [
    "Mode",
    "TABLES",
    "TableSpec",
    "UserRow",
    "table_for",
]
