"""Clause classification CLI command."""

from __future__ import annotations

import click
from rich.table import Table

from sqlpager.cli.utils import console, print_json
from sqlpager.pagination import classify


@click.command(name="classify")
@click.argument("sql")
@click.pass_context
def classify_command(ctx: click.Context, sql: str) -> None:
    """Show which clauses SQL contains and whether counting needs a sub-query."""
    profile = classify(sql)
    flags = {
        'select': profile.has_select,
        'from': profile.has_from,
        'where': profile.has_where,
        'order_by': profile.has_order_by,
        'complex': profile.is_complex,
    }

    if ctx.obj.get('output') == "json":
        print_json(flags)
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Clause", style="cyan")
    table.add_column("Present", style="green")
    for name, present in flags.items():
        table.add_row(name, "yes" if present else "no")
    console.print(table)
