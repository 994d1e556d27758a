"""Base database adapter and query execution."""

import logging
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional, Sequence, Tuple

import pandas as pd
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, Connection
from sqlalchemy.exc import SQLAlchemyError

from sqlpager.config.models import DatabaseConfig, ConnectionPoolConfig, PaginationSettings
from sqlpager.exceptions import DatabaseError
from sqlpager.pagination.dialects import PaginationStrategy, get_strategy
from sqlpager.pagination.models import Page, PaginationResult
from sqlpager.pagination.paginator import Paginator
from sqlpager.pagination.placeholders import bind_parameters, to_named_binds

logger = logging.getLogger(__name__)


class QueryResult:
    """Container for query results with metadata."""

    def __init__(
        self,
        data: Optional[pd.DataFrame] = None,
        rows_affected: Optional[int] = None,
        execution_time: Optional[float] = None,
        columns: Optional[List[str]] = None,
    ) -> None:
        """Initialize query result.

        Args:
            data: Result data as DataFrame.
            rows_affected: Number of rows returned or affected by the query.
            execution_time: Query execution time in seconds.
            columns: Column names for the result.
        """
        self.data = data
        self.rows_affected = rows_affected or 0
        self.execution_time = execution_time or 0.0
        self.columns = columns or []

    @property
    def is_empty(self) -> bool:
        return self.data is None or self.data.empty

    def scalar(self) -> Any:
        """First column of the first row, or ``None`` for an empty result."""
        if self.is_empty:
            return None
        return self.data.iloc[0, 0]


class BaseAdapter(ABC):
    """Base class for database adapters.

    An adapter owns one SQLAlchemy engine and doubles as the page executor
    for its dialect: :meth:`count` and :meth:`query` accept statements with
    the dialect's placeholders and bind them as SQLAlchemy named parameters.
    """

    test_query = "SELECT 1 AS test"

    def __init__(
        self,
        config: DatabaseConfig,
        pool_config: Optional[ConnectionPoolConfig] = None,
    ) -> None:
        """Initialize database adapter.

        Args:
            config: Database configuration.
            pool_config: Connection pool configuration.
        """
        self.config = config
        self.pool_config = pool_config or ConnectionPoolConfig()
        self._engine: Optional[Engine] = None
        self._strategy: Optional[PaginationStrategy] = None

    @abstractmethod
    def build_connection_string(self) -> str:
        """Build database connection string.

        Returns:
            SQLAlchemy URL for this database.
        """
        pass

    @abstractmethod
    def get_driver_name(self) -> str:
        pass

    def get_engine(self) -> Engine:
        """Get or create the SQLAlchemy engine.

        Raises:
            DatabaseError: If engine creation fails.
        """
        if self._engine is None:
            try:
                connection_string = self.build_connection_string()

                engine_args = self._get_pool_options()
                engine_args['echo'] = False
                engine_args.update(self._get_engine_options())

                self._engine = create_engine(connection_string, **engine_args)
                logger.debug(f"Created {self.config.type.value} engine using {self.get_driver_name()}")

            except Exception as e:
                raise DatabaseError(
                    f"Failed to create database engine: {e}",
                    database_type=self.config.type.value,
                ) from e

        return self._engine

    def _get_pool_options(self) -> Dict[str, Any]:
        """Queue pool arguments derived from the pool configuration."""
        return {
            'pool_size': self.pool_config.max_connections,
            'max_overflow': self.pool_config.max_overflow,
            'pool_timeout': self.pool_config.timeout,
            'pool_recycle': self.pool_config.pool_recycle,
            'pool_pre_ping': self.pool_config.pool_pre_ping,
        }

    def _get_engine_options(self) -> Dict[str, Any]:
        """Database-specific engine options, merged over the pool options."""
        return {}

    @contextmanager
    def get_connection(self) -> Generator[Connection, None, None]:
        """Get database connection with automatic cleanup.

        Raises:
            DatabaseError: If the connection or a statement run on it fails.
        """
        engine = self.get_engine()
        connection = None

        try:
            connection = engine.connect()
            yield connection
            connection.commit()

        except SQLAlchemyError as e:
            self._rollback_quietly(connection)
            raise DatabaseError(
                f"Database connection error: {e}",
                database_type=self.config.type.value,
            ) from e

        except Exception as e:
            self._rollback_quietly(connection)
            raise DatabaseError(
                f"Unexpected database error: {e}",
                database_type=self.config.type.value,
            ) from e

        finally:
            if connection:
                connection.close()

    @staticmethod
    def _rollback_quietly(connection: Optional[Connection]) -> None:
        if connection is None:
            return
        try:
            connection.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Rollback failed: {e}")

    def test_connection(self) -> bool:
        """Run a trivial query against the database.

        Raises:
            DatabaseError: If connection test fails.
        """
        try:
            with self.get_connection() as conn:
                conn.execute(text(self.test_query)).fetchone()
                return True

        except Exception as e:
            raise DatabaseError(
                f"Connection test failed: {e}",
                database_type=self.config.type.value,
            ) from e

    def execute_query(
        self,
        query: str,
        params: Optional[Dict[str, Any]] = None,
        fetch_results: bool = True,
    ) -> QueryResult:
        """Execute SQL query and return results.

        Args:
            query: SQL query string using ``:name`` binds.
            params: Query parameters.
            fetch_results: Whether to fetch result data.

        Returns:
            QueryResult instance.

        Raises:
            DatabaseError: If query execution fails.
        """
        start_time = time.time()

        try:
            with self.get_connection() as conn:
                if params:
                    result = conn.execute(text(query), params)
                else:
                    result = conn.execute(text(query))

                execution_time = time.time() - start_time

                if result.returns_rows and fetch_results:
                    rows = result.fetchall()
                    columns = list(result.keys())
                    df = pd.DataFrame(rows, columns=columns) if rows else pd.DataFrame(columns=columns)
                    return QueryResult(
                        data=df,
                        rows_affected=len(rows),
                        execution_time=execution_time,
                        columns=columns,
                    )

                rows_affected = result.rowcount if result.rowcount >= 0 else 0
                return QueryResult(
                    rows_affected=rows_affected,
                    execution_time=execution_time,
                )

        except DatabaseError as e:
            execution_time = time.time() - start_time
            raise DatabaseError(
                f"Query execution failed after {execution_time:.2f}s: {e.message}",
                database_type=self.config.type.value,
                details={'query': query},
            ) from e

    # ==================== Pagination ====================

    def pagination_strategy(self, settings: Optional[PaginationSettings] = None) -> PaginationStrategy:
        """Strategy matching this adapter's database type."""
        if settings is not None:
            return get_strategy(self.config.type, settings)
        if self._strategy is None:
            self._strategy = get_strategy(self.config.type)
        return self._strategy

    def _bind(self, statement: str, parameters: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
        """Convert dialect placeholders into SQLAlchemy named binds."""
        style = self.pagination_strategy().placeholder_style
        return to_named_binds(statement, style), bind_parameters(parameters)

    def count(self, statement: str, parameters: Sequence[Any] = ()) -> int:
        """Run a count statement and return its single value."""
        query, params = self._bind(statement, parameters)
        result = self.execute_query(query, params)
        value = result.scalar()
        return int(value) if value is not None else 0

    def query(self, statement: str, parameters: Sequence[Any] = ()) -> QueryResult:
        """Run a page statement."""
        query, params = self._bind(statement, parameters)
        return self.execute_query(query, params)

    def paginator(self, settings: Optional[PaginationSettings] = None) -> Paginator:
        """Paginator that executes through this adapter."""
        return Paginator(self.pagination_strategy(settings), self, settings)

    def paginate(self, source: str = "", *args: Any, settings: Optional[PaginationSettings] = None, **kwargs: Any) -> Page:
        """Fetch one page; accepts the arguments of :meth:`Paginator.build_request`."""
        return self.paginator(settings).fetch_page(source, *args, **kwargs)

    def preview(self, source: str = "", *args: Any, settings: Optional[PaginationSettings] = None, **kwargs: Any) -> PaginationResult:
        return self.paginator(settings).preview(source, *args, **kwargs)

    def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self._engine:
            self._engine.dispose()
            self._engine = None
