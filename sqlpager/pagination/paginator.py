"""Pagination engine: a strategy plus the executor that runs its statements."""

import logging
from typing import Any, Optional, Protocol, Sequence, Union, runtime_checkable

from sqlpager.config.models import DatabaseType, PaginationSettings
from sqlpager.exceptions import ConfigurationError, PaginationError
from sqlpager.pagination.dialects import PaginationStrategy, get_strategy
from sqlpager.pagination.models import (
    FilterInput,
    Page,
    PaginationRequest,
    PaginationResult,
    normalize_page,
    normalize_page_size,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class PageExecutor(Protocol):
    """Runs the statements a strategy produces.

    Statements arrive with placeholders already rendered for the dialect.
    """

    def count(self, statement: str, parameters: Sequence[Any]) -> int:
        ...

    def query(self, statement: str, parameters: Sequence[Any]) -> Any:
        ...


class Paginator:
    """Counts, then fetches, one page of rows."""

    def __init__(
        self,
        strategy: Union[PaginationStrategy, DatabaseType, str],
        executor: Optional[PageExecutor] = None,
        settings: Optional[PaginationSettings] = None,
    ) -> None:
        """Initialize the paginator.

        Args:
            strategy: Strategy instance, or a dialect to create one for.
            executor: Object running count and page statements. Only needed
                for :meth:`fetch` and :meth:`fetch_page`.
            settings: Page size defaults; taken from the strategy when omitted.
        """
        if isinstance(strategy, PaginationStrategy):
            self.strategy = strategy
            self.settings = settings or strategy.settings
        else:
            self.settings = settings or PaginationSettings()
            self.strategy = get_strategy(strategy, self.settings)
        self.executor = executor

    def build_request(
        self,
        source: str = "",
        parameters: Sequence[Any] = (),
        filter: FilterInput = None,
        order: Union[str, Sequence[str], None] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        table: Optional[str] = None,
    ) -> PaginationRequest:
        """Create a request with page and page size normalized against the settings."""
        return PaginationRequest(
            source=source,
            table=table,
            parameters=tuple(parameters or ()),
            filter=filter,
            order=order or (),
            page=normalize_page(page),
            page_size=normalize_page_size(
                page_size,
                self.settings.default_page_size,
                self.settings.max_page_size,
            ),
        )

    def preview(self, *args: Any, **kwargs: Any) -> PaginationResult:
        """Build the statements for a page without executing anything.

        Accepts the same arguments as :meth:`build_request`.
        """
        return self.strategy.paginate(self.build_request(*args, **kwargs))

    def fetch_page(self, *args: Any, **kwargs: Any) -> Page:
        """Count and fetch a page; accepts the arguments of :meth:`build_request`."""
        return self.fetch(self.build_request(*args, **kwargs))

    def fetch(self, request: PaginationRequest) -> Page:
        """Execute ``request``.

        The page statement is skipped when the count is zero.

        Raises:
            ConfigurationError: If no executor was supplied.
            PaginationError: If either statement fails.
        """
        if self.executor is None:
            raise ConfigurationError("An executor is required to fetch pages")

        result = self.strategy.paginate(request)
        dialect = result.dialect

        try:
            total = int(self.executor.count(result.count_statement, list(result.parameters)))
        except Exception as e:
            logger.error(f"Count statement failed on {dialect}: {e}")
            raise PaginationError(
                f"failed to count rows: {e}",
                statement=result.count_statement,
                dialect=dialect,
            ) from e

        if total == 0:
            logger.debug("Count returned 0 rows, skipping page statement")
            return Page(total=0, rows=[], result=result, page=result.page, page_size=result.page_size)

        try:
            rows = self.executor.query(result.page_statement, list(result.parameters))
        except Exception as e:
            logger.error(f"Page statement failed on {dialect}: {e}")
            raise PaginationError(
                f"failed to query page: {e}",
                statement=result.page_statement,
                dialect=dialect,
            ) from e

        return Page(total=total, rows=rows, result=result, page=result.page, page_size=result.page_size)
