"""SQLPager: dialect-aware predicate building and SQL pagination.

SQLPager provides:
- Chainable WHERE and ORDER BY builders with positional parameters
- Heuristic clause classification of arbitrary SQL text
- Count and page statement generation for MySQL, MariaDB, TiDB, OceanBase,
  ClickHouse, SQLite, PostgreSQL, SQL Server and Oracle
- SQLAlchemy-backed execution and a YAML-configured CLI
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Core exports
from sqlpager.exceptions import (
    SQLPagerError,
    ConfigurationError,
    DatabaseError,
    BuilderError,
    PaginationError,
)
from sqlpager.builder import Order, Where
from sqlpager.pagination import (
    Page,
    PaginationRequest,
    PaginationResult,
    Paginator,
    get_strategy,
)

__all__ = [
    "__version__",
    "SQLPagerError",
    "ConfigurationError",
    "DatabaseError",
    "BuilderError",
    "PaginationError",
    "Order",
    "Where",
    "Page",
    "PaginationRequest",
    "PaginationResult",
    "Paginator",
    "get_strategy",
]
