"""Database connection management and adapter factory."""

import logging
import time
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Type

from sqlpager.config.models import DatabaseConfig, DatabaseType, ConnectionPoolConfig, SQLPagerConfig
from sqlpager.db.base import BaseAdapter, QueryResult
from sqlpager.db.adapters.clickhouse import ClickHouseAdapter
from sqlpager.db.adapters.mysql import MySQLAdapter
from sqlpager.db.adapters.oracle import OracleAdapter
from sqlpager.db.adapters.postgresql import PostgreSQLAdapter
from sqlpager.db.adapters.sqlite import SQLiteAdapter
from sqlpager.db.adapters.sqlserver import SQLServerAdapter
from sqlpager.exceptions import DatabaseError
from sqlpager.pagination.models import Page

logger = logging.getLogger(__name__)


class AdapterFactory:
    """Creates the adapter for a database configuration."""

    adapters: Mapping[DatabaseType, Type[BaseAdapter]] = MappingProxyType({
        DatabaseType.MYSQL: MySQLAdapter,
        DatabaseType.MARIADB: MySQLAdapter,
        DatabaseType.TIDB: MySQLAdapter,
        DatabaseType.OCEANBASE: MySQLAdapter,
        DatabaseType.CLICKHOUSE: ClickHouseAdapter,
        DatabaseType.SQLITE: SQLiteAdapter,
        DatabaseType.POSTGRESQL: PostgreSQLAdapter,
        DatabaseType.SQLSERVER: SQLServerAdapter,
        DatabaseType.ORACLE: OracleAdapter,
    })

    @classmethod
    def create_adapter(
        cls,
        config: DatabaseConfig,
        pool_config: Optional[ConnectionPoolConfig] = None,
    ) -> BaseAdapter:
        """Create a database adapter based on configuration.

        Raises:
            DatabaseError: If database type is not supported.
        """
        adapter_class = cls.adapters.get(config.type)
        if not adapter_class:
            supported_types = [db_type.value for db_type in cls.adapters]
            raise DatabaseError(
                f"Unsupported database type: {config.type}. "
                f"Supported types: {supported_types}"
            )

        return adapter_class(config, pool_config)

    @classmethod
    def get_supported_types(cls) -> List[DatabaseType]:
        return list(cls.adapters.keys())


class ConnectionManager:
    """Creates adapters for the configured databases on first use."""

    def __init__(self, config: SQLPagerConfig) -> None:
        """Initialize connection manager.

        Args:
            config: SQLPager configuration.
        """
        self.config = config
        self._adapters: Dict[str, BaseAdapter] = {}

    def get_adapter(self, db_name: Optional[str] = None) -> BaseAdapter:
        """Get database adapter by name.

        Args:
            db_name: Database connection name. If None, uses default database.

        Raises:
            DatabaseError: If database connection is not found or creation fails.
        """
        if db_name is None:
            db_name = self.config.default_database

        if not db_name:
            raise DatabaseError("No database specified and no default database configured")

        if db_name not in self.config.databases:
            available_dbs = list(self.config.databases.keys())
            raise DatabaseError(
                f"Database '{db_name}' not found in configuration. "
                f"Available databases: {available_dbs}"
            )

        if db_name in self._adapters:
            return self._adapters[db_name]

        db_config = self.config.databases[db_name]
        pool_config = self.config.connection_pools.get("default", ConnectionPoolConfig())
        try:
            adapter = AdapterFactory.create_adapter(db_config, pool_config)
        except DatabaseError as e:
            raise DatabaseError(
                f"Failed to create adapter for database '{db_name}': {e.message}",
                database_type=db_config.type.value,
            ) from e

        logger.debug(f"Created {db_config.type.value} adapter for '{db_name}'")
        self._adapters[db_name] = adapter
        return adapter

    def test_connection(self, db_name: Optional[str] = None) -> Dict[str, Any]:
        """Test database connection.

        Returns:
            Connection test result with timing and status information.
        """
        start_time = time.time()
        name = db_name or self.config.default_database

        try:
            adapter = self.get_adapter(db_name)
            adapter.test_connection()

            return {
                'database': name,
                'status': 'success',
                'message': 'Connection successful',
                'response_time': round((time.time() - start_time) * 1000, 2),
                'driver': adapter.get_driver_name(),
                'database_type': adapter.config.type.value,
            }

        except DatabaseError as e:
            logger.error(f"Connection test for '{name}' failed: {e}")
            return {
                'database': name,
                'status': 'failed',
                'message': str(e),
                'response_time': round((time.time() - start_time) * 1000, 2),
                'error': type(e).__name__,
            }

    def test_all_connections(self) -> Dict[str, Dict[str, Any]]:
        return {db_name: self.test_connection(db_name) for db_name in self.config.databases}

    def execute_query(
        self,
        query: str,
        params: Optional[Dict[str, Any]] = None,
        db_name: Optional[str] = None,
    ) -> QueryResult:
        adapter = self.get_adapter(db_name)
        return adapter.execute_query(query, params)

    def paginate(self, source: str = "", *args: Any, db_name: Optional[str] = None, **kwargs: Any) -> Page:
        """Fetch a page from ``db_name`` using the configured pagination settings.

        Accepts the arguments of :meth:`sqlpager.pagination.Paginator.build_request`.
        """
        adapter = self.get_adapter(db_name)
        return adapter.paginate(source, *args, settings=self.config.pagination, **kwargs)

    def get_database_info(self, db_name: Optional[str] = None) -> Dict[str, Any]:
        """Describe a configured database without connecting to it."""
        adapter = self.get_adapter(db_name)
        db_config = adapter.config
        strategy = adapter.pagination_strategy(self.config.pagination)

        return {
            'database_name': db_name or self.config.default_database,
            'database_type': db_config.type.value,
            'driver': adapter.get_driver_name(),
            'host': db_config.host,
            'port': db_config.port,
            'database': db_config.database,
            'username': db_config.username,
            'path': db_config.path,
            'strategy': type(strategy).__name__,
            'placeholder_style': strategy.placeholder_style.value,
        }

    def close_all(self) -> None:
        """Dispose of every adapter created so far."""
        for adapter in self._adapters.values():
            adapter.close()
        self._adapters.clear()
