"""
Infrastructure package for idbench.

Centralizes database connectivity (connection factory, prepared statements).
Keep this layer focused on I/O and resource management, decoupled from
generator/orchestrator logic.
"""

from idbench.infrastructure.db_factory import PreparedInsert, build_dsn, get_sync_connection

__all__ = [
    "PreparedInsert",
    "build_dsn",
    "get_sync_connection",
]
