"""Tests for the ORDER BY builder."""

from sqlpager.builder import Order
from sqlpager.pagination import get_strategy


def test_empty_order_builds_nothing() -> None:
    assert Order().build() == ""
    assert Order().is_empty()


def test_setting_operations_replace() -> None:
    order = Order().asc("name").desc("created_at")
    assert order.build() == "ORDER BY created_at DESC"


def test_order_by_and_append() -> None:
    order = Order().order_by("id DESC").append("name ASC")
    assert order.fragment == "id DESC, name ASC"
    assert Order().append("name").build() == "ORDER BY name"


def test_multiple_skips_empty_keys() -> None:
    assert Order().multiple(["a ASC", "", "b DESC"]).build() == "ORDER BY a ASC, b DESC"
    assert Order().multiple(None).is_empty()


def test_by_field_quotes_strings_and_leaves_numbers_bare() -> None:
    order = Order().by_field("status", ["open", "it's", 3])
    assert order.build() == (
        "ORDER BY CASE status WHEN 'open' THEN 0 WHEN 'it''s' THEN 1 WHEN 3 THEN 2 END"
    )


def test_by_field_ignores_empty_values() -> None:
    assert Order().by_field("status", []).is_empty()


def test_conditional_variants() -> None:
    order = Order().asc_if(False, "a").desc_if(True, "b").append_if(False, "c")
    assert order.build() == "ORDER BY b DESC"
    assert Order().order_by_if(False, "x").is_empty()


def test_random_uses_dialect_function() -> None:
    assert Order().random().build() == "ORDER BY RAND()"
    assert get_strategy("postgresql").new_order().random().build() == "ORDER BY RANDOM()"
    assert get_strategy("sqlserver").new_order().random().build() == "ORDER BY NEWID()"
    assert get_strategy("oracle").new_order().random().build() == "ORDER BY DBMS_RANDOM.VALUE"


def test_clear() -> None:
    order = Order().asc("a").clear()
    assert str(order) == ""
