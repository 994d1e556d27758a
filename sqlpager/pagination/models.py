"""Pagination request and result types."""

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple, Union

from sqlpager.builder import Order, Where

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

FilterInput = Union[str, Mapping[str, Any], Where, None]


def normalize_page(page: Optional[int]) -> int:
    """Pages start at 1; anything lower means the first page."""
    if page is None or page <= 0:
        return DEFAULT_PAGE
    return int(page)


def normalize_page_size(
    page_size: Optional[int],
    default: int = DEFAULT_PAGE_SIZE,
    maximum: Optional[int] = None,
) -> int:
    """Replace a missing or non-positive page size with ``default`` and clamp to ``maximum``."""
    size = default if page_size is None or page_size <= 0 else int(page_size)
    if maximum is not None and size > maximum:
        size = maximum
    return size


@dataclass(frozen=True)
class PaginationRequest:
    """One page request against a table, predicate or statement.

    ``page`` is normalized on construction. A missing or non-positive
    ``page_size`` is stored as ``None`` and resolved by the strategy against
    its :class:`~sqlpager.config.models.PaginationSettings`.
    """

    source: str = ""
    table: Optional[str] = None
    parameters: Tuple[Any, ...] = ()
    filter: FilterInput = None
    order: Tuple[str, ...] = ()
    page: int = DEFAULT_PAGE
    page_size: Optional[int] = None

    def __post_init__(self) -> None:
        order = self.order
        if isinstance(order, Order):
            order = (order.fragment,)
        elif isinstance(order, str):
            order = (order,)
        object.__setattr__(self, 'order', tuple(item for item in (order or ()) if item))
        object.__setattr__(self, 'parameters', tuple(self.parameters or ()))
        object.__setattr__(self, 'page', normalize_page(self.page))
        if self.page_size is not None:
            object.__setattr__(self, 'page_size', int(self.page_size) if self.page_size > 0 else None)

    @property
    def offset(self) -> int:
        return (self.page - 1) * (self.page_size or DEFAULT_PAGE_SIZE)

    @property
    def order_fragment(self) -> str:
        """Ordering keys joined into one ``ORDER BY`` body."""
        return ", ".join(self.order)


@dataclass(frozen=True)
class PaginationResult:
    """Count and page statements sharing one parameter sequence."""

    count_statement: str
    page_statement: str
    parameters: Tuple[Any, ...] = ()
    dialect: str = ""
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    offset: int = 0


@dataclass
class Page:
    """Rows of one page together with the total row count."""

    total: int
    rows: Any = None
    result: Optional[PaginationResult] = field(default=None, repr=False)
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def pages(self) -> int:
        if self.total <= 0:
            return 0
        return math.ceil(self.total / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def is_empty(self) -> bool:
        return self.total == 0
