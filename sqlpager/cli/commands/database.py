"""Database management CLI commands."""

from __future__ import annotations

from typing import Any, Dict, Optional

import click
from rich.table import Table

from sqlpager.cli.utils import console, load_cli_config
from sqlpager.db import ConnectionManager
from sqlpager.exceptions import ConfigurationError, DatabaseError


@click.group(name="db")
@click.pass_context
def db_group(ctx: click.Context) -> None:
    """Database connection management."""
    pass


@db_group.command(name="test")
@click.option("--database", "-d", help="Specific database to test (default: all)")
@click.pass_context
def test_connection_command(ctx: click.Context, database: Optional[str]) -> None:
    """Test database connections."""
    try:
        config = load_cli_config(ctx.obj.get('config'))
        manager = ConnectionManager(config)

        console.print("[bold blue]Testing Database Connections[/bold blue]\n")

        if database:
            results = {database: manager.test_connection(database)}
        else:
            results = manager.test_all_connections()

        for result in results.values():
            _show_connection_result(result)
            console.print()

        manager.close_all()
        if any(result['status'] != 'success' for result in results.values()):
            raise SystemExit(1)
    except ConfigurationError as exc:
        console.print(f"[red]Configuration Error: {exc}[/red]")
        raise SystemExit(1) from exc


@db_group.command(name="status")
@click.pass_context
def status_command(ctx: click.Context) -> None:
    """Show configured databases and their pagination strategies."""
    try:
        config = load_cli_config(ctx.obj.get('config'))
        manager = ConnectionManager(config)

        console.print("[bold blue]Configured Databases[/bold blue]\n")

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Database", style="cyan")
        table.add_column("Type", style="green")
        table.add_column("Driver", style="yellow")
        table.add_column("Strategy", style="white")
        table.add_column("Placeholders", style="white")
        table.add_column("Default", style="blue")

        for db_name in config.databases:
            info = manager.get_database_info(db_name)
            is_default = "✓" if db_name == config.default_database else ""
            table.add_row(
                db_name,
                info['database_type'],
                info['driver'],
                info['strategy'],
                info['placeholder_style'],
                is_default,
            )

        console.print(table)
        console.print(f"\nTotal: {len(config.databases)} configured")
    except (ConfigurationError, DatabaseError) as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise SystemExit(1) from exc


def _show_connection_result(result: Dict[str, Any]) -> None:
    if result['status'] == 'success':
        console.print(f"[green]✅ {result['database']}[/green] ({result['database_type']}, {result['driver']})")
        console.print(f"   Response time: {result['response_time']} ms")
    else:
        console.print(f"[red]❌ {result['database']}[/red]")
        console.print(f"   {result['message']}")
