"""Database adapters for different database types."""

from sqlpager.db.adapters.clickhouse import ClickHouseAdapter
from sqlpager.db.adapters.mysql import MySQLAdapter
from sqlpager.db.adapters.oracle import OracleAdapter
from sqlpager.db.adapters.postgresql import PostgreSQLAdapter
from sqlpager.db.adapters.sqlite import SQLiteAdapter
from sqlpager.db.adapters.sqlserver import SQLServerAdapter

__all__ = [
    "ClickHouseAdapter",
    "MySQLAdapter",
    "OracleAdapter",
    "PostgreSQLAdapter",
    "SQLiteAdapter",
    "SQLServerAdapter",
]
