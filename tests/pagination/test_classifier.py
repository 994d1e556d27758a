"""Tests for lexical clause classification."""

import pytest

from sqlpager.pagination.classifier import (
    ClauseProfile,
    classify,
    clause_end,
    find_keyword,
    find_top_level,
    is_table_name,
    paren_depths,
    starts_statement,
)


class TestClassify:

    def test_simple_statement(self) -> None:
        profile = classify("SELECT * FROM users WHERE age > 18")
        assert profile == ClauseProfile(
            has_select=True,
            has_from=True,
            has_where=True,
            has_order_by=False,
            is_complex=False,
        )
        assert profile.is_statement

    def test_bare_predicate(self) -> None:
        profile = classify("age > 18")
        assert not profile.has_select
        assert not profile.is_statement
        assert not profile.is_complex

    @pytest.mark.parametrize("sql", [
        "SELECT dept, COUNT(*) FROM emp GROUP BY dept",
        "SELECT * FROM a JOIN b ON a.id = b.a_id",
        "SELECT * FROM a LEFT JOIN b ON a.id = b.a_id",
        "SELECT DISTINCT name FROM users",
        "SELECT id FROM a UNION SELECT id FROM b",
        "SELECT * FROM users WHERE id IN (SELECT user_id FROM orders)",
        "SELECT * FROM users WHERE id IN ( SELECT user_id FROM orders)",
        "SELECT dept FROM emp GROUP BY dept HAVING COUNT(*) > 1",
    ])
    def test_complex_statements(self, sql: str) -> None:
        assert classify(sql).is_complex

    def test_case_insensitive(self) -> None:
        profile = classify("select * from users where id = 1 order by id")
        assert profile.has_select and profile.has_from and profile.has_where and profile.has_order_by

    def test_multiline_matches_single_line(self) -> None:
        multi = "SELECT *\nFROM users\n\tWHERE age > 18\nORDER   BY id"
        single = "SELECT * FROM users WHERE age > 18 ORDER BY id"
        assert classify(multi) == classify(single)

    def test_idempotent(self) -> None:
        sql = "SELECT u.id FROM users u JOIN orders o ON o.user_id = u.id"
        assert classify(sql) == classify(sql)

    def test_keywords_inside_literals_are_matched(self) -> None:
        # Known limitation of lexical scanning.
        assert classify("SELECT * FROM t WHERE note = ' GROUP BY '").is_complex

    def test_identifier_containing_keyword_is_not_matched(self) -> None:
        profile = classify("SELECT * FROM user_groups_by_region")
        assert not profile.is_complex
        assert not profile.has_where

    def test_empty_input(self) -> None:
        profile = classify("")
        assert not any([profile.has_select, profile.has_from, profile.is_complex])


class TestHelpers:

    def test_find_keyword(self) -> None:
        sql = "SELECT a FROM t WHERE b = 1"
        assert find_keyword(sql, " WHERE ") == sql.index(" WHERE ")
        assert find_keyword(sql, " ORDER BY ") == -1
        assert find_keyword(sql, " FROM ", 10) == -1

    def test_paren_depths_ignore_literals(self) -> None:
        depths = paren_depths("a(')')b")
        assert depths == [0, 0, 1, 1, 1, 0, 0]

    def test_find_top_level_skips_subqueries(self) -> None:
        sql = "SELECT * FROM (SELECT * FROM t WHERE x = 1) s WHERE y = 2"
        assert find_top_level(sql, " WHERE ") == sql.rindex(" WHERE ")
        assert find_top_level("SELECT (SELECT 1 FROM t WHERE 1=1) x FROM u", " WHERE ") == -1

    def test_find_top_level_last(self) -> None:
        sql = "SELECT * FROM a ORDER BY x UNION SELECT * FROM (SELECT * FROM b ORDER BY z) s ORDER BY y"
        assert find_top_level(sql, " ORDER BY ") == sql.index(" ORDER BY ")
        assert find_top_level(sql, " ORDER BY ", last=True) == sql.rindex(" ORDER BY ")

    def test_clause_end(self) -> None:
        sql = "SELECT * FROM t WHERE a = 1 GROUP BY a ORDER BY a"
        start = sql.index("WHERE")
        assert clause_end(sql, [" GROUP BY ", " ORDER BY "], start) == sql.index(" GROUP BY ")
        assert clause_end(sql, [" LIMIT "], start) == len(sql)

    def test_clause_end_stops_at_closing_paren(self) -> None:
        sql = "SELECT * FROM (SELECT * FROM t WHERE a = 1) s ORDER BY a"
        start = sql.index("WHERE")
        assert clause_end(sql, [" ORDER BY "], start) == sql.index(")")

    @pytest.mark.parametrize("source, expected", [
        ("users", True),
        ("public.users", True),
        ('"My Table"', True),
        ("[dbo].[users]", True),
        ("age > 18", False),
        ("SELECT * FROM users", False),
        ("", False),
    ])
    def test_is_table_name(self, source: str, expected: bool) -> None:
        assert is_table_name(source) is expected

    @pytest.mark.parametrize("source, expected", [
        ("SELECT * FROM t", True),
        ("  select 1", True),
        ("(SELECT a FROM t) UNION (SELECT a FROM u)", True),
        ("WITH x AS (SELECT 1) SELECT * FROM x", True),
        ("id IN (SELECT id FROM t)", False),
        ("selected = 1", False),
    ])
    def test_starts_statement(self, source: str, expected: bool) -> None:
        assert starts_statement(source) is expected
