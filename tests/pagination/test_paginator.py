"""Tests for the pagination engine with fake executors."""

from typing import Any, List, Sequence, Tuple

import pytest

from sqlpager.config.models import PaginationSettings
from sqlpager.exceptions import ConfigurationError, PaginationError
from sqlpager.pagination import PageExecutor, Paginator, get_strategy


class RecordingExecutor:
    """Executor double that records every statement it receives."""

    def __init__(self, total: int = 0, rows: Any = None) -> None:
        self.total = total
        self.rows = rows if rows is not None else []
        self.count_calls: List[Tuple[str, List[Any]]] = []
        self.query_calls: List[Tuple[str, List[Any]]] = []

    def count(self, statement: str, parameters: Sequence[Any]) -> int:
        self.count_calls.append((statement, list(parameters)))
        return self.total

    def query(self, statement: str, parameters: Sequence[Any]) -> Any:
        self.query_calls.append((statement, list(parameters)))
        return self.rows


class FailingExecutor(RecordingExecutor):

    def __init__(self, fail_on: str, total: int = 5) -> None:
        super().__init__(total=total)
        self.fail_on = fail_on

    def count(self, statement: str, parameters: Sequence[Any]) -> int:
        if self.fail_on == "count":
            raise RuntimeError("connection reset")
        return super().count(statement, parameters)

    def query(self, statement: str, parameters: Sequence[Any]) -> Any:
        if self.fail_on == "query":
            raise RuntimeError("syntax error")
        return super().query(statement, parameters)


def test_executor_satisfies_protocol() -> None:
    assert isinstance(RecordingExecutor(), PageExecutor)


def test_zero_count_skips_page_statement() -> None:
    executor = RecordingExecutor(total=0)
    page = Paginator("mysql", executor).fetch_page("users", page=3)

    assert len(executor.count_calls) == 1
    assert executor.query_calls == []
    assert page.total == 0
    assert page.rows == []
    assert page.pages == 0
    assert not page.has_next
    assert page.has_previous


def test_count_then_query_with_shared_parameters() -> None:
    executor = RecordingExecutor(total=25, rows=[{"id": 11}])
    paginator = Paginator(get_strategy("postgresql"), executor)

    page = paginator.fetch_page(
        "SELECT * FROM users WHERE age > ?",
        parameters=[18],
        filter={"status": "active"},
        order=["id"],
        page=2,
    )

    count_sql, count_params = executor.count_calls[0]
    page_sql, page_params = executor.query_calls[0]
    assert count_sql == "SELECT COUNT(*) FROM users WHERE age > $1 AND (status = $2)"
    assert page_sql == "SELECT * FROM users WHERE age > $1 AND (status = $2) ORDER BY id LIMIT 10 OFFSET 10"
    assert count_params == page_params == [18, "active"]

    assert page.total == 25
    assert page.rows == [{"id": 11}]
    assert page.pages == 3
    assert page.has_next
    assert page.has_previous
    assert page.result.page_statement == page_sql


def test_page_size_defaults_come_from_settings() -> None:
    settings = PaginationSettings(default_page_size=25, max_page_size=100)
    paginator = Paginator("sqlite", settings=settings)

    assert paginator.preview("users", page_size=0).page_size == 25
    assert paginator.preview("users", page_size=1000).page_size == 100
    assert paginator.preview("users", page=-1).offset == 0


def test_preview_needs_no_executor() -> None:
    result = Paginator("oracle").preview("users", page=2)
    assert result.page_statement.endswith("OFFSET 10 ROWS FETCH NEXT 10 ROWS ONLY")


def test_missing_executor_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        Paginator("mysql").fetch_page("users")


def test_count_failure_is_wrapped() -> None:
    executor = FailingExecutor("count")
    with pytest.raises(PaginationError) as exc_info:
        Paginator("mysql", executor).fetch_page("users")

    error = exc_info.value
    assert str(error).startswith("failed to count rows")
    assert error.statement == "SELECT COUNT(*) FROM users WHERE 1=1"
    assert error.dialect == "mysql"
    assert isinstance(error.__cause__, RuntimeError)


def test_query_failure_is_wrapped() -> None:
    executor = FailingExecutor("query")
    with pytest.raises(PaginationError) as exc_info:
        Paginator("sqlserver", executor).fetch_page("users")

    assert str(exc_info.value).startswith("failed to query page")
    assert "FETCH NEXT 10 ROWS ONLY" in exc_info.value.statement
    assert len(executor.count_calls) == 1


def test_first_page_has_no_previous() -> None:
    page = Paginator("mysql", RecordingExecutor(total=3)).fetch_page("users")
    assert page.page == 1
    assert not page.has_previous
    assert not page.has_next
