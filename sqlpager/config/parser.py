"""YAML configuration loading for SQLPager.

Configuration files may reference environment variables as ``${VAR}`` or
``${VAR:-default}`` and pull in other files through ``include:`` (a name or a
list of names, resolved relative to the including file). Included files are
merged underneath the including one, so the including file wins on conflicts.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

import yaml
from pydantic import ValidationError

from sqlpager.config.models import EnvironmentSettings, PaginationSettings, SQLPagerConfig
from sqlpager.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_CONFIG_NAMES = ("sqlpager.yaml", "sqlpager.yml", "config/sqlpager.yaml")

ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')


def expand_env_vars(value: Any) -> Any:
    """Resolve ``${VAR}`` references anywhere inside a parsed YAML document.

    Raises:
        ConfigurationError: If a variable without a default is not set.
    """
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    if isinstance(value, str):
        return ENV_VAR_PATTERN.sub(_env_value, value)
    return value


def _env_value(match: "re.Match[str]") -> str:
    name, has_default, default = match.group(1).partition(':-')
    name = name.strip()
    resolved = os.getenv(name)
    if resolved is not None:
        return resolved
    if has_default:
        return default.strip()
    raise ConfigurationError(f"Required environment variable '{name}' is not set")


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``override`` onto ``base``; nested mappings merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigParser:
    """Finds, reads and validates SQLPager configuration files."""

    def __init__(self, env_settings: Optional[EnvironmentSettings] = None) -> None:
        """Initialize the configuration parser.

        Args:
            env_settings: Environment settings; read from ``SQLPAGER_*`` when omitted.
        """
        self.env_settings = env_settings or EnvironmentSettings()

    def load_config(self, config_path: Optional[PathLike] = None) -> SQLPagerConfig:
        """Load and validate configuration.

        Args:
            config_path: Configuration file. When omitted, ``SQLPAGER_CONFIG_FILE``
                and then the default locations in the working directory are tried.

        Returns:
            Validated SQLPagerConfig instance.

        Raises:
            ConfigurationError: If no file is found or its content is invalid.
        """
        config_file = self.find_config_file(config_path)
        logger.debug(f"Loading configuration from {config_file}")

        document = self._load_document(config_file, set())
        if not document:
            raise ConfigurationError(f"Configuration file '{config_file}' is empty")

        document = self._apply_env_overrides(document)
        try:
            return SQLPagerConfig(**document)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e
        except TypeError as e:
            raise ConfigurationError(f"Error loading configuration: {e}") from e

    def find_config_file(self, config_path: Optional[PathLike] = None) -> Path:
        """Resolve the configuration file to load.

        Raises:
            ConfigurationError: If no configuration file is found.
        """
        if config_path:
            path = Path(config_path)
            if not path.exists():
                raise ConfigurationError(f"Configuration file '{config_path}' not found")
            return path

        candidates = [Path.cwd() / name for name in DEFAULT_CONFIG_NAMES]
        if self.env_settings.config_file:
            candidates.insert(0, Path(self.env_settings.config_file))

        for candidate in candidates:
            if candidate.exists():
                return candidate

        raise ConfigurationError(
            f"No configuration file found in default locations: {[str(c) for c in candidates]}"
        )

    def _load_document(self, path: Path, seen: Set[Path]) -> Dict[str, Any]:
        resolved = path.resolve()
        if resolved in seen:
            raise ConfigurationError(f"Circular include of '{path}'")
        seen = seen | {resolved}

        document = self._read_yaml(path)
        if document is None:
            return {}
        if not isinstance(document, dict):
            raise ConfigurationError(f"Configuration file '{path}' must contain a mapping")

        document = expand_env_vars(document)
        merged: Dict[str, Any] = {}
        for name in self._include_names(document.pop('include', None)):
            merged = merge_configs(merged, self._load_document(path.parent / name, seen))
        return merge_configs(merged, document)

    @staticmethod
    def _read_yaml(path: Path) -> Any:
        try:
            with open(path, 'r', encoding='utf-8') as file:
                return yaml.safe_load(file)
        except FileNotFoundError as e:
            raise ConfigurationError(f"Configuration file '{path}' not found") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in '{path}': {e}") from e

    @staticmethod
    def _include_names(include: Any) -> List[str]:
        if include is None:
            return []
        if isinstance(include, (list, tuple)):
            return [str(name) for name in include]
        return [str(include)]

    def _apply_env_overrides(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Let ``SQLPAGER_DEFAULT_PAGE_SIZE``/``SQLPAGER_MAX_PAGE_SIZE`` win over the file."""
        overrides = {
            key: value
            for key, value in (
                ('default_page_size', self.env_settings.default_page_size),
                ('max_page_size', self.env_settings.max_page_size),
            )
            if value is not None
        }
        if not overrides:
            return document
        logger.debug(f"Pagination overrides from environment: {overrides}")
        return merge_configs(document, {'pagination': overrides})

    def create_sample_config(self, output_path: PathLike) -> None:
        """Write a sample configuration with a PostgreSQL and a SQLite database."""
        pagination = PaginationSettings(max_page_size=500).model_dump()
        sample_config = {
            'databases': {
                'dev': {
                    'type': 'postgresql',
                    'host': 'localhost',
                    'port': 5432,
                    'database': 'myapp_dev',
                    'username': 'dev_user',
                    'password': '${DEV_DB_PASSWORD:-dev_password}',
                    'options': {'sslmode': 'prefer', 'connect_timeout': 10},
                },
                'local': {
                    'type': 'sqlite',
                    'path': './local.db',
                },
            },
            'connection_pools': {
                'default': {'max_connections': 10, 'max_overflow': 5, 'timeout': 30},
            },
            'default_database': 'local',
            'pagination': pagination,
        }

        with open(output_path, 'w', encoding='utf-8') as file:
            yaml.safe_dump(sample_config, file, default_flow_style=False, sort_keys=False)


def load_config(config_path: Optional[PathLike] = None) -> SQLPagerConfig:
    """Load a configuration file with a fresh parser."""
    return ConfigParser().load_config(config_path)


def validate_config_file(config_path: PathLike) -> bool:
    """Validate a configuration file.

    Returns:
        True if valid.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    ConfigParser().load_config(config_path)
    return True


def create_sample_config(output_path: PathLike) -> None:
    ConfigParser().create_sample_config(output_path)
