"""Tests for placeholder rendering and bind conversion."""

import pytest

from sqlpager.pagination.placeholders import (
    PlaceholderStyle,
    bind_parameters,
    count_placeholders,
    render,
    to_named_binds,
)

SQL = "SELECT * FROM t WHERE a = ? AND b IN (?, ?) AND note <> 'why?'"


def test_count_ignores_literals() -> None:
    assert count_placeholders(SQL) == 3
    assert count_placeholders("SELECT 'it''s ?' FROM t") == 0


@pytest.mark.parametrize("style, expected", [
    (PlaceholderStyle.QMARK, SQL),
    (PlaceholderStyle.DOLLAR, "SELECT * FROM t WHERE a = $1 AND b IN ($2, $3) AND note <> 'why?'"),
    (PlaceholderStyle.AT_NAMED, "SELECT * FROM t WHERE a = @p1 AND b IN (@p2, @p3) AND note <> 'why?'"),
    (PlaceholderStyle.COLON_NUMERIC, "SELECT * FROM t WHERE a = :1 AND b IN (:2, :3) AND note <> 'why?'"),
])
def test_render(style: PlaceholderStyle, expected: str) -> None:
    assert render(SQL, style) == expected


@pytest.mark.parametrize("style", list(PlaceholderStyle))
def test_rendered_statements_convert_to_named_binds(style: PlaceholderStyle) -> None:
    named = to_named_binds(render(SQL, style), style)
    assert named == "SELECT * FROM t WHERE a = :p1 AND b IN (:p2, :p3) AND note <> 'why?'"


def test_colon_binds_leave_casts_alone() -> None:
    sql = "SELECT x::int FROM t WHERE a = :1"
    assert to_named_binds(sql, PlaceholderStyle.COLON_NUMERIC) == "SELECT x::int FROM t WHERE a = :p1"


def test_bind_parameters() -> None:
    assert bind_parameters(["a", 2]) == {"p1": "a", "p2": 2}
    assert bind_parameters([]) == {}
