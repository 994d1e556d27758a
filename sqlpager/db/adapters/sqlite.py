"""SQLite database adapter."""

from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy.pool import StaticPool

from sqlpager.config.models import DatabaseConfig, ConnectionPoolConfig
from sqlpager.db.base import BaseAdapter
from sqlpager.exceptions import DatabaseError

MEMORY_PATH = ":memory:"


class SQLiteAdapter(BaseAdapter):
    """SQLite database adapter."""

    def __init__(
        self,
        config: DatabaseConfig,
        pool_config: Optional[ConnectionPoolConfig] = None,
    ) -> None:
        super().__init__(config, pool_config)

        if not self.config.path:
            raise DatabaseError("SQLite requires a database file path", database_type="sqlite")

    @property
    def in_memory(self) -> bool:
        return self.config.path == MEMORY_PATH

    def get_driver_name(self) -> str:
        return "sqlite"

    def build_connection_string(self) -> str:
        """Build SQLite connection string.

        Relative paths resolve against the working directory, and the parent
        directory is created when missing.
        """
        if self.in_memory:
            return "sqlite://"

        db_path = Path(self.config.path)
        if not db_path.is_absolute():
            db_path = Path.cwd() / db_path

        db_path.parent.mkdir(parents=True, exist_ok=True)

        return f"sqlite:///{db_path}"

    def _get_pool_options(self) -> Dict[str, Any]:
        # One shared connection keeps an in-memory database alive between queries.
        if self.in_memory:
            return {'poolclass': StaticPool}
        return super()._get_pool_options()

    def _get_engine_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            'connect_args': {
                'check_same_thread': False,
                'timeout': self.config.options.get('timeout', 30),
            }
        }
        if not self.in_memory:
            options['pool_recycle'] = -1
        return options
