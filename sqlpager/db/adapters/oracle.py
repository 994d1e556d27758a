"""Oracle database adapter."""

from typing import Optional
from urllib.parse import quote_plus

from sqlpager.config.models import DatabaseConfig, ConnectionPoolConfig
from sqlpager.db.base import BaseAdapter
from sqlpager.exceptions import DatabaseError


class OracleAdapter(BaseAdapter):
    """Oracle database adapter using python-oracledb.

    ``database`` is the service name.
    """

    test_query = "SELECT 1 FROM DUAL"

    def __init__(
        self,
        config: DatabaseConfig,
        pool_config: Optional[ConnectionPoolConfig] = None,
    ) -> None:
        super().__init__(config, pool_config)

        if self.config.port is None:
            self.config.port = 1521

    def get_driver_name(self) -> str:
        return "oracledb"

    def build_connection_string(self) -> str:
        if not all([self.config.host, self.config.database, self.config.username, self.config.password]):
            raise DatabaseError(
                "Oracle requires host, database (service name), username, and password",
                database_type="oracle",
            )

        password_encoded = quote_plus(self.config.password)
        return (
            f"oracle+oracledb://{self.config.username}:{password_encoded}@"
            f"{self.config.host}:{self.config.port}/?service_name={self.config.database}"
        )
