"""Configuration management for SQLPager."""

from sqlpager.config.models import (
    DatabaseType,
    DatabaseConfig,
    ConnectionPoolConfig,
    PaginationSettings,
    SQLPagerConfig,
    EnvironmentSettings,
)
from sqlpager.config.parser import (
    ConfigParser,
    load_config,
    validate_config_file,
    create_sample_config,
)

__all__ = [
    # Models
    "DatabaseType",
    "DatabaseConfig",
    "ConnectionPoolConfig",
    "PaginationSettings",
    "SQLPagerConfig",
    "EnvironmentSettings",
    # Parser
    "ConfigParser",
    "load_config",
    "validate_config_file",
    "create_sample_config",
]
