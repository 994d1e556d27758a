"""Pydantic models for SQLPager configuration."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import (
    BaseModel,
    Field,
    field_validator,
    model_validator,
    AliasChoices,
    ConfigDict,
)
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseType(str, Enum):
    """Supported database families.

    The set is closed: every member maps to exactly one pagination strategy
    and one adapter.
    """
    MYSQL = "mysql"
    MARIADB = "mariadb"
    TIDB = "tidb"
    OCEANBASE = "oceanbase"
    CLICKHOUSE = "clickhouse"
    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    SQLSERVER = "sqlserver"
    ORACLE = "oracle"

    @classmethod
    def parse(cls, value: "str | DatabaseType") -> "DatabaseType":
        """Resolve a dialect name, accepting a few common aliases."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = _DIALECT_ALIASES.get(key, key)
        return cls(key)


_DIALECT_ALIASES = {
    "postgres": "postgresql",
    "pg": "postgresql",
    "sqlite3": "sqlite",
    "mssql": "sqlserver",
    "oceanbase-mysql": "oceanbase",
}


class ConnectionPoolConfig(BaseModel):
    """Connection pool configuration handed to SQLAlchemy engines."""
    max_connections: int = Field(default=20, ge=1, le=1000, description="Maximum number of connections allowed")
    timeout: int = Field(default=30, ge=1, le=3600, description="Connection timeout in seconds")
    pool_recycle: int = Field(default=3600, ge=-1, le=86400, description="Connection recycle time in seconds")
    pool_pre_ping: bool = Field(default=True, description="Validate connections before use")
    max_overflow: int = Field(default=10, ge=0, le=100, description="Number of connections to allow beyond max_connections")

    @model_validator(mode='after')
    def validate_connection_limits(self):
        """Cap max_overflow at max_connections."""
        if self.max_overflow > self.max_connections:
            object.__setattr__(self, 'max_overflow', self.max_connections)

        return self


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    model_config = ConfigDict(populate_by_name=True)

    type: DatabaseType = Field(validation_alias=AliasChoices("type", "driver", "dialect"))
    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    path: Optional[str] = None  # For SQLite
    options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('type', mode='before')
    def normalize_type(cls, v):
        """Accept dialect aliases such as ``postgres`` or ``mssql``."""
        if isinstance(v, str):
            return DatabaseType.parse(v)
        return v

    @field_validator('port')
    def validate_port(cls, v):
        """Validate port number range."""
        if v is not None and (v < 1 or v > 65535):
            raise ValueError("Port must be between 1 and 65535")
        return v

    @model_validator(mode='after')
    def validate_database_config(self):
        """Validate database-specific required fields."""
        if self.type == DatabaseType.SQLITE:
            if not (self.path or self.database):
                raise ValueError("SQLite databases require a 'path' or 'database' field")
            if not self.path:
                object.__setattr__(self, "path", self.database)
            return self

        required_fields = ['host', 'database', 'username']
        for field in required_fields:
            if not getattr(self, field):
                raise ValueError(f"{self.type.value} databases require '{field}' field")
        return self


class PaginationSettings(BaseModel):
    """Defaults applied when normalizing pagination requests."""
    default_page_size: int = Field(default=10, ge=1, description="Page size used when the caller passes size <= 0")
    max_page_size: Optional[int] = Field(default=None, ge=1, description="Upper bound for page size, unbounded when unset")
    count_alias: str = Field(default="count_table", pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")
    oracle_rownum: bool = Field(default=False, description="Use ROWNUM pagination for Oracle releases before 12c")

    @model_validator(mode='after')
    def validate_page_sizes(self):
        """Ensure the default page size fits under the maximum."""
        if self.max_page_size is not None and self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size must be <= max_page_size")
        return self


class SQLPagerConfig(BaseModel):
    """Main configuration model for SQLPager."""
    databases: Dict[str, DatabaseConfig] = Field(default_factory=dict)
    connection_pools: Dict[str, ConnectionPoolConfig] = Field(
        default_factory=lambda: {"default": ConnectionPoolConfig()}
    )
    default_database: Optional[str] = None
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)

    @model_validator(mode='after')
    def validate_default_database(self):
        """Ensure default_database exists in databases."""
        if self.default_database and self.default_database not in self.databases:
            raise ValueError(f"default_database '{self.default_database}' not found in databases")
        return self

    @model_validator(mode='after')
    def set_default_database(self):
        """Set default database if not specified."""
        if not self.default_database and self.databases:
            self.default_database = next(iter(self.databases))
        return self


class EnvironmentSettings(BaseSettings):
    """Environment-specific settings."""

    model_config = SettingsConfigDict(env_prefix="SQLPAGER_", case_sensitive=False)

    log_level: str = Field(default="WARNING")
    debug: bool = Field(default=False)
    config_file: Optional[str] = Field(default=None)
    default_page_size: Optional[int] = Field(default=None, ge=1)
    max_page_size: Optional[int] = Field(default=None, ge=1)
