"""Pagination CLI command."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import click
from rich.panel import Panel
from rich.syntax import Syntax

from sqlpager.cli.utils import (
    console,
    dataframe_table,
    load_cli_config,
    parse_value,
    print_exception,
    print_json,
)
from sqlpager.config import PaginationSettings
from sqlpager.db import ConnectionManager
from sqlpager.exceptions import SQLPagerError
from sqlpager.pagination import Page, PaginationResult, Paginator


def _parse_filters(filters: Tuple[str, ...]) -> Dict[str, object]:
    parsed: Dict[str, object] = {}
    for item in filters:
        if "=" not in item:
            raise click.BadParameter(f"expected FIELD=VALUE, got '{item}'", param_hint="--filter")
        field_name, raw = item.split("=", 1)
        parsed[field_name.strip()] = parse_value(raw)
    return parsed


@click.command(name="paginate")
@click.argument("source")
@click.option("--dialect", "-D", help="Target dialect when previewing (default: mysql); --execute uses the database type")
@click.option("--table", "-t", help="Table a bare predicate SOURCE applies to")
@click.option("--page", "-p", type=int, default=1, show_default=True, help="Page number, starting at 1")
@click.option("--page-size", "-n", type=int, help="Rows per page")
@click.option("--order", "-o", "order", multiple=True, help="Ordering key, e.g. 'id DESC' (repeatable)")
@click.option("--filter", "-f", "filters", multiple=True, help="Equality filter FIELD=VALUE (repeatable)")
@click.option("--param", "params", multiple=True, help="Positional parameter for '?' in SOURCE (repeatable)")
@click.option("--execute", "-x", is_flag=True, help="Run the statements against the configured database")
@click.pass_context
def paginate_command(
    ctx: click.Context,
    source: str,
    dialect: Optional[str],
    table: Optional[str],
    page: int,
    page_size: Optional[int],
    order: Tuple[str, ...],
    filters: Tuple[str, ...],
    params: Tuple[str, ...],
    execute: bool,
) -> None:
    """Build (and optionally run) the count and page statements for SOURCE.

    SOURCE is a table name, a predicate (with --table) or a full SELECT.
    """
    verbose = ctx.obj.get('verbose', False)
    request_args = dict(
        parameters=[parse_value(value) for value in params],
        filter=_parse_filters(filters) or None,
        order=list(order),
        page=page,
        page_size=page_size,
        table=table,
    )

    try:
        config = load_cli_config(ctx.obj.get('config'), required=execute)
        settings = config.pagination if config else PaginationSettings()

        if execute:
            manager = ConnectionManager(config)
            adapter = manager.get_adapter(ctx.obj.get('db'))
            paginator = adapter.paginator(settings)
            result_page = paginator.fetch_page(source, **request_args)
            _show_page(result_page, ctx.obj.get('output', 'table'))
        else:
            paginator = Paginator(dialect or "mysql", settings=settings)
            result = paginator.preview(source, **request_args)
            _show_statements(result, ctx.obj.get('output', 'table'))

    except SQLPagerError as exc:
        print_exception("Pagination failed", exc, verbose)
        raise SystemExit(1) from exc


def _show_statements(result: PaginationResult, output: str) -> None:
    if output == "json":
        print_json({
            'dialect': result.dialect,
            'count_statement': result.count_statement,
            'page_statement': result.page_statement,
            'parameters': list(result.parameters),
            'page': result.page,
            'page_size': result.page_size,
            'offset': result.offset,
        })
        return

    console.print(Panel(Syntax(result.count_statement, "sql", word_wrap=True), title="Count statement"))
    console.print(Panel(Syntax(result.page_statement, "sql", word_wrap=True), title="Page statement"))
    console.print(
        f"[dim]dialect={result.dialect} page={result.page} "
        f"page_size={result.page_size} offset={result.offset}[/dim]"
    )
    if result.parameters:
        console.print(f"Parameters: {list(result.parameters)}")


def _show_page(page: Page, output: str) -> None:
    data = page.rows.data if page.rows is not None and hasattr(page.rows, 'data') else None

    if output == "json":
        print_json({
            'total': page.total,
            'page': page.page,
            'page_size': page.page_size,
            'pages': page.pages,
            'has_next': page.has_next,
            'rows': data.to_dict('records') if data is not None else [],
        })
        return

    if data is not None and not data.empty:
        console.print(dataframe_table(data, title=f"Page {page.page} of {page.pages}"))
    else:
        console.print("[yellow]No rows[/yellow]")
    console.print(f"\nTotal: {page.total} row(s), {page.pages} page(s)")
