"""SQL Server database adapter."""

from typing import Any, Dict, Optional
from urllib.parse import quote_plus

from sqlpager.config.models import DatabaseConfig, ConnectionPoolConfig
from sqlpager.db.base import BaseAdapter
from sqlpager.exceptions import DatabaseError

DEFAULT_ODBC_DRIVER = "ODBC Driver 18 for SQL Server"


class SQLServerAdapter(BaseAdapter):
    """SQL Server database adapter using pyodbc."""

    def __init__(
        self,
        config: DatabaseConfig,
        pool_config: Optional[ConnectionPoolConfig] = None,
    ) -> None:
        super().__init__(config, pool_config)

        if self.config.port is None:
            self.config.port = 1433

    def get_driver_name(self) -> str:
        return "pyodbc"

    def build_connection_string(self) -> str:
        """Build SQL Server connection string.

        Raises:
            DatabaseError: If required configuration is missing.
        """
        if not all([self.config.host, self.config.database, self.config.username, self.config.password]):
            raise DatabaseError(
                "SQL Server requires host, database, username, and password",
                database_type="sqlserver",
            )

        password_encoded = quote_plus(self.config.password)
        odbc_driver = quote_plus(self.config.options.get('odbc_driver', DEFAULT_ODBC_DRIVER))

        connection_string = (
            f"mssql+pyodbc://{self.config.username}:{password_encoded}@"
            f"{self.config.host}:{self.config.port}/{self.config.database}"
            f"?driver={odbc_driver}"
        )
        if self.config.options.get('trust_server_certificate', True):
            connection_string += "&TrustServerCertificate=yes"
        return connection_string

    def _get_engine_options(self) -> Dict[str, Any]:
        return {'fast_executemany': True}
