"""Tests for the WHERE predicate builder."""

import pytest

from sqlpager.builder import Where
from sqlpager.exceptions import BuilderError


class TestBasicConditions:
    """add / or_ / raw behaviour."""

    def test_fresh_builder_builds_empty(self) -> None:
        assert Where().build() == ("", [])
        assert Where().is_empty()

    @pytest.mark.parametrize("count", [1, 2, 5])
    def test_adds_join_with_and(self, count: int) -> None:
        where = Where()
        for i in range(count):
            where.add(f"c{i} = ?", i)

        sql, values = where.build()
        assert sql.count(" AND ") == count - 1
        assert values == list(range(count))

    def test_empty_fragment_is_skipped(self) -> None:
        where = Where().add("", 1)
        assert where.is_empty()
        assert where.values == []

    def test_or_after_add(self) -> None:
        sql, values = Where().add("a = ?", 1).or_("b = ?", 2).build()
        assert sql == "(a = ?) OR (b = ?)"
        assert values == [1, 2]

    def test_or_only_combines_last_fragment(self) -> None:
        sql, values = Where().add("a = ?", 1).add("b = ?", 2).or_("c = ?", 3).build()
        assert sql == "a = ? AND (b = ?) OR (c = ?)"
        assert values == [1, 2, 3]

    def test_or_on_empty_builder_adds(self) -> None:
        assert Where().or_("a = 1").build() == ("a = 1", [])

    def test_conditional_variants(self) -> None:
        where = (
            Where()
            .add_if(True, "a = ?", 1)
            .add_if(False, "b = ?", 2)
            .or_if(False, "c = ?", 3)
            .raw_if(True, "d IS TRUE")
        )
        assert where.build() == ("a = ? AND d IS TRUE", [1])

    def test_aliases(self) -> None:
        where = Where().where("a = ?", 1).and_("b = ?", 2).where_if(True, "c = ?", 3)
        assert where.fragments == ["a = ?", "b = ?", "c = ?"]

    def test_raw_is_verbatim(self) -> None:
        sql, values = Where().raw("x @> ?::jsonb", '{"a": 1}').build()
        assert sql == "x @> ?::jsonb"
        assert values == ['{"a": 1}']


class TestMembership:
    """in_ / not_in."""

    def test_in_one_placeholder_per_value(self) -> None:
        sql, values = Where().in_("id", [1, 2, 3]).build()
        assert sql == "id IN (?, ?, ?)"
        assert values == [1, 2, 3]

    def test_not_in_accepts_tuples_and_generators(self) -> None:
        assert Where().not_in("id", (4, 5)).build() == ("id NOT IN (?, ?)", [4, 5])
        assert Where().in_("id", (i for i in range(2))).build() == ("id IN (?, ?)", [0, 1])

    @pytest.mark.parametrize("values", [[], None, 42, "abc", b"ab", {"a": 1}])
    def test_non_sequences_are_ignored(self, values) -> None:
        where = Where().add("a = ?", 1)
        where.in_("id", values).not_in("id", values)
        assert where.build() == ("a = ?", [1])

    def test_empty_field_is_ignored(self) -> None:
        assert Where().in_("", [1]).is_empty()


class TestRangesPatternsNulls:
    """between / like / null checks / exists."""

    def test_between(self) -> None:
        assert Where().between("age", 18, 30).build() == ("age BETWEEN ? AND ?", [18, 30])
        assert Where().not_between("age", 1, 2).build() == ("age NOT BETWEEN ? AND ?", [1, 2])

    def test_like_skips_empty_pattern(self) -> None:
        assert Where().like("name", "").is_empty()
        assert Where().like("name", None).is_empty()
        assert Where().like("name", "%bo%").build() == ("name LIKE ?", ["%bo%"])
        assert Where().not_like("name", "a%").build() == ("name NOT LIKE ?", ["a%"])

    def test_null_checks(self) -> None:
        sql, values = Where().is_null("deleted_at").is_not_null("email").build()
        assert sql == "deleted_at IS NULL AND email IS NOT NULL"
        assert values == []

    def test_exists(self) -> None:
        sql, values = Where().exists("SELECT 1 FROM orders o WHERE o.user_id = u.id AND o.total > ?", 10).build()
        assert sql == "EXISTS (SELECT 1 FROM orders o WHERE o.user_id = u.id AND o.total > ?)"
        assert values == [10]
        assert Where().not_exists("SELECT 1").build() == ("NOT EXISTS (SELECT 1)", [])


class TestGroups:
    """group / or_group."""

    def test_group_parenthesizes_and_appends_values(self) -> None:
        where = Where().add("status = ?", "active")
        where.group(lambda g: g.add("age > ?", 18).add("age < ?", 65))

        sql, values = where.build()
        assert sql == "status = ? AND (age > ? AND age < ?)"
        assert values == ["active", 18, 65]

    def test_empty_group_is_not_appended(self) -> None:
        where = Where().add("a = 1").group(lambda g: g.like("x", ""))
        assert where.fragments == ["a = 1"]

    def test_none_group_is_ignored(self) -> None:
        assert Where().group(None).is_empty()

    def test_or_group(self) -> None:
        where = Where().add("role = ?", "admin")
        where.or_group(lambda g: g.add("role = ?", "editor").add("verified = ?", True))

        sql, values = where.build()
        assert sql == "(role = ?) OR (role = ? AND verified = ?)"
        assert values == ["admin", "editor", True]

    def test_group_if(self) -> None:
        where = Where().group_if(False, lambda g: g.add("a = 1"))
        assert where.is_empty()


class TestState:
    """clear / introspection / strict mode."""

    def test_clear(self) -> None:
        where = Where().add("a = ?", 1).clear()
        assert where.build() == ("", [])
        assert not where
        assert len(where) == 0

    def test_properties_are_copies(self) -> None:
        where = Where().add("a = ?", 1)
        where.fragments.append("b = 2")
        where.values.append(2)
        assert where.build() == ("a = ?", [1])

    def test_str_and_len(self) -> None:
        where = Where().add("a = 1").add("b = 2")
        assert str(where) == "a = 1 AND b = 2"
        assert len(where) == 2
        assert where

    def test_strict_mode_raises(self) -> None:
        with pytest.raises(BuilderError) as exc_info:
            Where(strict=True).in_("id", [])
        assert exc_info.value.operation == "IN"

    def test_strict_mode_propagates_to_groups(self) -> None:
        with pytest.raises(BuilderError):
            Where(strict=True).group(lambda g: g.like("name", ""))
