"""Dialect pagination strategies.

A strategy turns a :class:`PaginationRequest` into a count statement and a
page statement that share one parameter sequence. The dialect set is closed
(:class:`~sqlpager.config.models.DatabaseType`); :func:`get_strategy` maps
each member to its strategy class.
"""

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Mapping, Optional, Type, Union

from sqlpager.builder import Order
from sqlpager.config.models import DatabaseType, PaginationSettings
from sqlpager.exceptions import ConfigurationError
from sqlpager.pagination.classifier import classify, is_complex
from sqlpager.pagination.counting import (
    derive_count_statement,
    ensure_where,
    has_limiting_clause,
    has_set_operation,
    has_top_level_order,
    inject_filter,
    inject_order,
    normalize_statement,
    split_order_by,
    wrap_statement,
)
from sqlpager.pagination.filters import resolve_filter
from sqlpager.pagination.models import PaginationRequest, PaginationResult, normalize_page_size
from sqlpager.pagination.placeholders import PlaceholderStyle, render

logger = logging.getLogger(__name__)


class PaginationStrategy:
    """Shared pagination algorithm; subclasses supply the dialect specifics."""

    dialect: DatabaseType
    placeholder_style: PlaceholderStyle = PlaceholderStyle.QMARK
    random_function: str = "RAND()"
    # Text between a derived table and its alias.
    alias_keyword: str = "AS "

    def __init__(self, settings: Optional[PaginationSettings] = None) -> None:
        self.settings = settings or PaginationSettings()

    @property
    def count_alias(self) -> str:
        return self.settings.count_alias

    def new_order(self) -> Order:
        """Order builder whose ``random()`` uses this dialect's function."""
        return Order(random_function=self.random_function)

    def paginate(self, request: PaginationRequest) -> PaginationResult:
        """Build the count and page statements for ``request``.

        Args:
            request: Source, filter, ordering and page to produce.

        Returns:
            A :class:`PaginationResult` with placeholders rendered for this dialect.

        Raises:
            ConfigurationError: If the source cannot be turned into a statement
                or the filter type is unsupported.
        """
        page_size = normalize_page_size(
            request.page_size,
            self.settings.default_page_size,
            self.settings.max_page_size,
        )
        if page_size != request.page_size:
            request = replace(request, page_size=page_size)

        profile = classify(request.source)
        fragment, values = resolve_filter(request.filter)
        statement = normalize_statement(request.source, request.table, profile)
        complex_statement = profile.is_complex
        carried_order = ""

        # Sources with their own limit are paged as a derived table.
        if has_limiting_clause(statement):
            statement = wrap_statement(statement, alias_keyword=self.alias_keyword)
        elif fragment and has_set_operation(statement):
            statement, carried_order = split_order_by(statement)
            statement = wrap_statement(statement, alias_keyword=self.alias_keyword)

        if fragment:
            complex_statement = complex_statement or is_complex(f" {fragment} ")

        statement = ensure_where(statement)
        statement, parameters = inject_filter(statement, request.parameters, fragment, values)

        statement_profile = replace(
            profile,
            has_select=True,
            has_from=True,
            has_where=True,
            is_complex=complex_statement,
        )
        count_statement = derive_count_statement(
            statement,
            statement_profile,
            alias=self.count_alias,
            alias_keyword=self.alias_keyword,
        )
        page_statement = self.apply_limit(
            inject_order(statement, request.order_fragment or carried_order),
            request.offset,
            request.page_size,
        )

        result = PaginationResult(
            count_statement=render(count_statement, self.placeholder_style),
            page_statement=render(page_statement, self.placeholder_style),
            parameters=tuple(parameters),
            dialect=self.dialect.value,
            page=request.page,
            page_size=request.page_size,
            offset=request.offset,
        )
        logger.debug(f"[{self.dialect.value}] count statement: {result.count_statement}")
        logger.debug(f"[{self.dialect.value}] page statement: {result.page_statement}")
        return result

    def apply_limit(self, sql: str, offset: int, limit: int) -> str:
        """Append the dialect's limiting clause to ``sql``."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dialect={self.dialect.value!r})"


class LimitOffsetStrategy(PaginationStrategy):
    """``LIMIT n OFFSET o`` pagination."""

    def apply_limit(self, sql: str, offset: int, limit: int) -> str:
        return f"{sql} LIMIT {limit} OFFSET {offset}"


class MySQLStrategy(LimitOffsetStrategy):
    dialect = DatabaseType.MYSQL


class MariaDBStrategy(LimitOffsetStrategy):
    dialect = DatabaseType.MARIADB


class TiDBStrategy(LimitOffsetStrategy):
    dialect = DatabaseType.TIDB


class OceanBaseStrategy(LimitOffsetStrategy):
    """OceanBase in MySQL compatibility mode."""
    dialect = DatabaseType.OCEANBASE


class ClickHouseStrategy(LimitOffsetStrategy):
    dialect = DatabaseType.CLICKHOUSE
    random_function = "rand()"


class SQLiteStrategy(LimitOffsetStrategy):
    dialect = DatabaseType.SQLITE
    random_function = "RANDOM()"


class PostgreSQLStrategy(LimitOffsetStrategy):
    dialect = DatabaseType.POSTGRESQL
    placeholder_style = PlaceholderStyle.DOLLAR
    random_function = "RANDOM()"


class SQLServerStrategy(PaginationStrategy):
    """``OFFSET ... FETCH NEXT`` pagination; SQL Server requires an ``ORDER BY`` for it."""

    dialect = DatabaseType.SQLSERVER
    placeholder_style = PlaceholderStyle.AT_NAMED
    random_function = "NEWID()"
    neutral_order = "(SELECT NULL)"

    def apply_limit(self, sql: str, offset: int, limit: int) -> str:
        if not has_top_level_order(sql):
            sql = f"{sql} ORDER BY {self.neutral_order}"
        return f"{sql} OFFSET {offset} ROWS FETCH NEXT {limit} ROWS ONLY"


class OracleStrategy(PaginationStrategy):
    """Oracle 12c+ row limiting clause."""

    dialect = DatabaseType.ORACLE
    placeholder_style = PlaceholderStyle.COLON_NUMERIC
    random_function = "DBMS_RANDOM.VALUE"
    alias_keyword = ""

    def apply_limit(self, sql: str, offset: int, limit: int) -> str:
        return f"{sql} OFFSET {offset} ROWS FETCH NEXT {limit} ROWS ONLY"


class OracleRownumStrategy(OracleStrategy):
    """Nested ``ROWNUM`` pagination for Oracle releases without ``FETCH NEXT``.

    Only used when ``PaginationSettings.oracle_rownum`` is set.
    """

    def apply_limit(self, sql: str, offset: int, limit: int) -> str:
        if offset <= 0:
            return f"SELECT * FROM ({sql}) WHERE ROWNUM <= {limit}"
        return (
            f"SELECT * FROM (SELECT a.*, ROWNUM rnum FROM ({sql}) a "
            f"WHERE ROWNUM <= {offset + limit}) WHERE rnum > {offset}"
        )


STRATEGIES: Mapping[DatabaseType, Type[PaginationStrategy]] = MappingProxyType({
    DatabaseType.MYSQL: MySQLStrategy,
    DatabaseType.MARIADB: MariaDBStrategy,
    DatabaseType.TIDB: TiDBStrategy,
    DatabaseType.OCEANBASE: OceanBaseStrategy,
    DatabaseType.CLICKHOUSE: ClickHouseStrategy,
    DatabaseType.SQLITE: SQLiteStrategy,
    DatabaseType.POSTGRESQL: PostgreSQLStrategy,
    DatabaseType.SQLSERVER: SQLServerStrategy,
    DatabaseType.ORACLE: OracleStrategy,
})


def get_strategy(
    dialect: Union[str, DatabaseType],
    settings: Optional[PaginationSettings] = None,
) -> PaginationStrategy:
    """Create the strategy for ``dialect``.

    Args:
        dialect: Database family or one of its names (``"postgres"``, ``"mssql"``...).
        settings: Page size defaults and Oracle mode; library defaults when omitted.

    Raises:
        ConfigurationError: If the dialect is not supported.
    """
    try:
        database_type = DatabaseType.parse(dialect)
    except ValueError as e:
        supported = ", ".join(member.value for member in DatabaseType)
        raise ConfigurationError(
            f"Unsupported dialect: {dialect}",
            details={'supported': supported},
        ) from e

    settings = settings or PaginationSettings()
    if database_type == DatabaseType.ORACLE and settings.oracle_rownum:
        return OracleRownumStrategy(settings)
    return STRATEGIES[database_type](settings)
