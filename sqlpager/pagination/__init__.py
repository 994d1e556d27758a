"""Dialect-aware pagination engine."""

from sqlpager.pagination.classifier import ClauseProfile, classify
from sqlpager.pagination.counting import (
    derive_count_statement,
    ensure_where,
    inject_filter,
    normalize_statement,
)
from sqlpager.pagination.dialects import (
    ClickHouseStrategy,
    MariaDBStrategy,
    MySQLStrategy,
    OceanBaseStrategy,
    OracleRownumStrategy,
    OracleStrategy,
    PaginationStrategy,
    PostgreSQLStrategy,
    SQLiteStrategy,
    SQLServerStrategy,
    STRATEGIES,
    TiDBStrategy,
    get_strategy,
)
from sqlpager.pagination.models import Page, PaginationRequest, PaginationResult
from sqlpager.pagination.paginator import PageExecutor, Paginator
from sqlpager.pagination.placeholders import PlaceholderStyle

__all__ = [
    # Classification and statement rewriting
    "ClauseProfile",
    "classify",
    "derive_count_statement",
    "ensure_where",
    "inject_filter",
    "normalize_statement",
    # Strategies
    "PaginationStrategy",
    "MySQLStrategy",
    "MariaDBStrategy",
    "TiDBStrategy",
    "OceanBaseStrategy",
    "ClickHouseStrategy",
    "SQLiteStrategy",
    "PostgreSQLStrategy",
    "SQLServerStrategy",
    "OracleStrategy",
    "OracleRownumStrategy",
    "STRATEGIES",
    "get_strategy",
    # Engine
    "Page",
    "PageExecutor",
    "PaginationRequest",
    "PaginationResult",
    "Paginator",
    "PlaceholderStyle",
]
