"""Main CLI entry point for SQLPager."""

from __future__ import annotations

import click

from sqlpager import __version__
from sqlpager.cli.commands import register_commands
from sqlpager.cli.commands.classify import classify_command
from sqlpager.cli.commands.configuration import config_group
from sqlpager.cli.commands.database import db_group
from sqlpager.cli.commands.paginate import paginate_command
from sqlpager.cli.utils import console, setup_logging


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version information")
@click.option("--config", type=click.Path(exists=True), help="Path to configuration file")
@click.option("--db", help="Database connection name")
@click.option("--output", type=click.Choice(["table", "json"]), default="table", help="Output format")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(
    ctx: click.Context,
    version: bool,
    config: str,
    db: str,
    output: str,
    verbose: bool,
) -> None:
    """SQLPager - dialect-aware SQL pagination."""
    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "config": config,
            "db": db,
            "output": output,
            "verbose": verbose,
        }
    )
    setup_logging(verbose)

    if version:
        console.print(f"SQLPager v{__version__}")
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


COMMAND_REGISTRY = [
    paginate_command,
    classify_command,
    db_group,
    config_group,
]

register_commands(cli, COMMAND_REGISTRY)


if __name__ == "__main__":
    cli()
