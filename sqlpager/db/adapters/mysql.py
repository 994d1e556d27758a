"""MySQL-protocol database adapter.

Serves MySQL itself and the wire-compatible MariaDB, TiDB and OceanBase
(MySQL mode) through PyMySQL; only the default port differs.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote_plus

from sqlpager.config.models import DatabaseConfig, ConnectionPoolConfig, DatabaseType
from sqlpager.db.base import BaseAdapter
from sqlpager.exceptions import DatabaseError

DEFAULT_PORTS = {
    DatabaseType.MYSQL: 3306,
    DatabaseType.MARIADB: 3306,
    DatabaseType.TIDB: 4000,
    DatabaseType.OCEANBASE: 2881,
}


class MySQLAdapter(BaseAdapter):
    """MySQL family database adapter."""

    def __init__(
        self,
        config: DatabaseConfig,
        pool_config: Optional[ConnectionPoolConfig] = None,
    ) -> None:
        super().__init__(config, pool_config)

        if self.config.type not in DEFAULT_PORTS:
            raise DatabaseError(
                f"MySQLAdapter cannot serve {self.config.type.value} databases",
                database_type=self.config.type.value,
            )
        if self.config.port is None:
            self.config.port = DEFAULT_PORTS[self.config.type]

    def get_driver_name(self) -> str:
        return "pymysql"

    def build_connection_string(self) -> str:
        """Build MySQL connection string.

        Raises:
            DatabaseError: If required configuration is missing.
        """
        if not all([self.config.host, self.config.database, self.config.username]):
            raise DatabaseError(
                f"{self.config.type.value} requires host, database and username",
                database_type=self.config.type.value,
            )

        password_encoded = quote_plus(self.config.password or "")

        connection_string = (
            f"mysql+pymysql://{self.config.username}:{password_encoded}@"
            f"{self.config.host}:{self.config.port}/{self.config.database}"
        )

        charset = self.config.options.get('charset', 'utf8mb4')
        return f"{connection_string}?charset={charset}"

    def _get_engine_options(self) -> Dict[str, Any]:
        return {
            'connect_args': {
                'connect_timeout': self.config.options.get('connect_timeout', 10),
                'autocommit': True,
            }
        }
