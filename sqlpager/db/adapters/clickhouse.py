"""ClickHouse database adapter."""

from typing import Any, Dict, Optional
from urllib.parse import quote_plus

from sqlpager.config.models import DatabaseConfig, ConnectionPoolConfig
from sqlpager.db.base import BaseAdapter
from sqlpager.exceptions import DatabaseError


class ClickHouseAdapter(BaseAdapter):
    """ClickHouse database adapter using the native protocol of clickhouse-sqlalchemy."""

    def __init__(
        self,
        config: DatabaseConfig,
        pool_config: Optional[ConnectionPoolConfig] = None,
    ) -> None:
        super().__init__(config, pool_config)

        if self.config.port is None:
            self.config.port = 9000

    def get_driver_name(self) -> str:
        return "clickhouse-driver"

    def build_connection_string(self) -> str:
        if not all([self.config.host, self.config.database, self.config.username]):
            raise DatabaseError(
                "ClickHouse requires host, database and username",
                database_type="clickhouse",
            )

        password_encoded = quote_plus(self.config.password or "")
        return (
            f"clickhouse+native://{self.config.username}:{password_encoded}@"
            f"{self.config.host}:{self.config.port}/{self.config.database}"
        )

    def _get_engine_options(self) -> Dict[str, Any]:
        # ClickHouse has no transactions; keep the pool from probing with rollbacks.
        return {'pool_reset_on_return': None}
