"""PostgreSQL database adapter."""

from typing import Any, Dict, Optional
from urllib.parse import quote_plus

from sqlpager.config.models import DatabaseConfig, ConnectionPoolConfig
from sqlpager.db.base import BaseAdapter
from sqlpager.exceptions import DatabaseError


class PostgreSQLAdapter(BaseAdapter):
    """PostgreSQL database adapter."""

    def __init__(
        self,
        config: DatabaseConfig,
        pool_config: Optional[ConnectionPoolConfig] = None,
    ) -> None:
        super().__init__(config, pool_config)

        if self.config.port is None:
            self.config.port = 5432

    def get_driver_name(self) -> str:
        return "psycopg2"

    def build_connection_string(self) -> str:
        """Build PostgreSQL connection string.

        Raises:
            DatabaseError: If required configuration is missing.
        """
        if not all([self.config.host, self.config.database, self.config.username, self.config.password]):
            raise DatabaseError(
                "PostgreSQL requires host, database, username, and password",
                database_type="postgresql",
            )

        password_encoded = quote_plus(self.config.password)

        connection_string = (
            f"postgresql+psycopg2://{self.config.username}:{password_encoded}@"
            f"{self.config.host}:{self.config.port}/{self.config.database}"
        )

        options = {
            key: value for key, value in self.config.options.items()
            if key not in ('connect_timeout', 'application_name')
        }
        options.setdefault('sslmode', 'prefer')

        option_string = "&".join(f"{k}={v}" for k, v in options.items())
        return f"{connection_string}?{option_string}"

    def _get_engine_options(self) -> Dict[str, Any]:
        return {
            'connect_args': {
                'connect_timeout': self.config.options.get('connect_timeout', 10),
                'application_name': self.config.options.get('application_name', 'sqlpager'),
            }
        }
