"""Shared CLI utilities for SQLPager."""

from __future__ import annotations

import json
import logging
import traceback
from typing import Any, Optional

import click
import yaml
from rich.console import Console
from rich.table import Table

from sqlpager.config import EnvironmentSettings, SQLPagerConfig, load_config
from sqlpager.exceptions import ConfigurationError

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Single console instance reused across CLI modules
console = Console()


def setup_logging(verbose: bool = False, env_settings: Optional[EnvironmentSettings] = None) -> None:
    """Configure root logging from ``--verbose`` or ``SQLPAGER_LOG_LEVEL``."""
    settings = env_settings or EnvironmentSettings()
    level_name = "DEBUG" if verbose or settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format=LOG_FORMAT,
        force=True,
    )


def print_exception(message: str, error: Exception, verbose: bool = False) -> None:
    """Render a formatted exception message.

    Args:
        message: Friendly context message to display before the exception.
        error: Original exception instance.
        verbose: When True, render the full traceback for debugging.
    """
    console.print(f"[red]{message}: {error}[/red]")
    if verbose:
        console.print(f"[dim]{traceback.format_exc()}[/dim]")


def load_cli_config(config_path: Optional[str], required: bool = True) -> Optional[SQLPagerConfig]:
    """Load the configuration named by ``--config`` or found in default locations.

    Returns ``None`` when nothing is found and ``required`` is false.
    """
    try:
        return load_config(config_path)
    except ConfigurationError:
        if required or config_path:
            raise
        return None


def parse_value(raw: str) -> Any:
    """Interpret a command-line value as a YAML scalar (``42``, ``true``, ``null``)."""
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    if isinstance(value, (dict, list)):
        return raw
    return value


def dataframe_table(data: Any, title: Optional[str] = None) -> Table:
    """Render a pandas DataFrame as a rich table."""
    table = Table(show_header=True, header_style="bold magenta", title=title)
    for column in data.columns:
        table.add_column(str(column), style="cyan")
    for row in data.itertuples(index=False):
        table.add_row(*("" if value is None else str(value) for value in row))
    return table


def print_json(data: Any) -> None:
    """Write ``data`` as indented JSON without rich markup or line wrapping."""
    click.echo(json.dumps(data, indent=2, default=str))
