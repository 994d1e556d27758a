"""Database connectivity and statement execution."""

from sqlpager.db.base import BaseAdapter, QueryResult
from sqlpager.db.connection import ConnectionManager, AdapterFactory
from sqlpager.db.adapters import (
    ClickHouseAdapter,
    MySQLAdapter,
    OracleAdapter,
    PostgreSQLAdapter,
    SQLiteAdapter,
    SQLServerAdapter,
)

__all__ = [
    # Base classes
    "BaseAdapter",
    "QueryResult",
    # Connection management
    "ConnectionManager",
    "AdapterFactory",
    # Database adapters
    "ClickHouseAdapter",
    "MySQLAdapter",
    "OracleAdapter",
    "PostgreSQLAdapter",
    "SQLiteAdapter",
    "SQLServerAdapter",
]
