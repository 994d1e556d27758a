"""Predicate builder that accumulates ``WHERE`` fragments and their bound values.

Fragments use ``?`` placeholders; dialect strategies render them into the
target placeholder style later. The builder is permissive: empty or malformed
input is skipped rather than raised, unless the builder is created with
``strict=True``.

Note that :meth:`Where.or_` only ORs with the *most recently added* fragment::

    Where().add("a = ?", 1).add("b = ?", 2).or_("c = ?", 3).build()
    # ("a = ? AND (b = ?) OR (c = ?)", [1, 2, 3])

Use :meth:`Where.group` to OR across more than one condition.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Callable, List, Optional, Tuple

from sqlpager.exceptions import BuilderError

GroupBuilder = Callable[["Where"], Any]


class Where:
    """Chainable predicate builder."""

    def __init__(self, strict: bool = False) -> None:
        """Initialize an empty builder.

        Args:
            strict: Raise :class:`BuilderError` on input that would be skipped.
        """
        self.strict = strict
        self._fragments: List[str] = []
        self._values: List[Any] = []

    # ==================== Basic conditions ====================

    def add(self, fragment: str, *values: Any) -> "Where":
        """Append ``fragment``; fragments are joined with ``AND``."""
        if not fragment:
            return self._skip("add", "empty fragment")
        self._fragments.append(fragment)
        self._values.extend(values)
        return self

    where = add
    and_ = add

    def add_if(self, condition: bool, fragment: str, *values: Any) -> "Where":
        """Append ``fragment`` only when ``condition`` is true."""
        if condition:
            return self.add(fragment, *values)
        return self

    where_if = add_if
    and_if = add_if

    def or_(self, fragment: str, *values: Any) -> "Where":
        """OR ``fragment`` with the last fragment, or append it when empty."""
        if not fragment:
            return self._skip("or", "empty fragment")
        if self._fragments:
            self._fragments[-1] = f"({self._fragments[-1]}) OR ({fragment})"
        else:
            self._fragments.append(fragment)
        self._values.extend(values)
        return self

    def or_if(self, condition: bool, fragment: str, *values: Any) -> "Where":
        if condition:
            return self.or_(fragment, *values)
        return self

    def raw(self, fragment: str, *values: Any) -> "Where":
        """Append ``fragment`` verbatim; the caller owns its correctness."""
        return self.add(fragment, *values)

    def raw_if(self, condition: bool, fragment: str, *values: Any) -> "Where":
        if condition:
            return self.raw(fragment, *values)
        return self

    # ==================== Set membership ====================

    def in_(self, field: str, values: Any) -> "Where":
        """Append ``field IN (?, ...)`` with one placeholder per element."""
        return self._membership("IN", field, values)

    def in_if(self, condition: bool, field: str, values: Any) -> "Where":
        if condition:
            return self.in_(field, values)
        return self

    def not_in(self, field: str, values: Any) -> "Where":
        """Append ``field NOT IN (?, ...)`` with one placeholder per element."""
        return self._membership("NOT IN", field, values)

    def not_in_if(self, condition: bool, field: str, values: Any) -> "Where":
        if condition:
            return self.not_in(field, values)
        return self

    def _membership(self, operator: str, field: str, values: Any) -> "Where":
        if not field:
            return self._skip(operator, "empty field")
        items = _as_value_list(values)
        if not items:
            return self._skip(operator, "expected a non-empty sequence of values")
        placeholders = ", ".join("?" for _ in items)
        return self.add(f"{field} {operator} ({placeholders})", *items)

    # ==================== Ranges and patterns ====================

    def between(self, field: str, low: Any, high: Any) -> "Where":
        """Append ``field BETWEEN ? AND ?``."""
        if not field:
            return self._skip("BETWEEN", "empty field")
        return self.add(f"{field} BETWEEN ? AND ?", low, high)

    def between_if(self, condition: bool, field: str, low: Any, high: Any) -> "Where":
        if condition:
            return self.between(field, low, high)
        return self

    def not_between(self, field: str, low: Any, high: Any) -> "Where":
        """Append ``field NOT BETWEEN ? AND ?``."""
        if not field:
            return self._skip("NOT BETWEEN", "empty field")
        return self.add(f"{field} NOT BETWEEN ? AND ?", low, high)

    def not_between_if(self, condition: bool, field: str, low: Any, high: Any) -> "Where":
        if condition:
            return self.not_between(field, low, high)
        return self

    def like(self, field: str, pattern: Optional[str]) -> "Where":
        """Append ``field LIKE ?``; skipped when the pattern is empty."""
        if not field or not pattern:
            return self._skip("LIKE", "empty field or pattern")
        return self.add(f"{field} LIKE ?", pattern)

    def like_if(self, condition: bool, field: str, pattern: Optional[str]) -> "Where":
        if condition:
            return self.like(field, pattern)
        return self

    def not_like(self, field: str, pattern: Optional[str]) -> "Where":
        """Append ``field NOT LIKE ?``; skipped when the pattern is empty."""
        if not field or not pattern:
            return self._skip("NOT LIKE", "empty field or pattern")
        return self.add(f"{field} NOT LIKE ?", pattern)

    def not_like_if(self, condition: bool, field: str, pattern: Optional[str]) -> "Where":
        if condition:
            return self.not_like(field, pattern)
        return self

    # ==================== Null checks ====================

    def is_null(self, field: str) -> "Where":
        if not field:
            return self._skip("IS NULL", "empty field")
        return self.add(f"{field} IS NULL")

    def is_null_if(self, condition: bool, field: str) -> "Where":
        if condition:
            return self.is_null(field)
        return self

    def is_not_null(self, field: str) -> "Where":
        if not field:
            return self._skip("IS NOT NULL", "empty field")
        return self.add(f"{field} IS NOT NULL")

    def is_not_null_if(self, condition: bool, field: str) -> "Where":
        if condition:
            return self.is_not_null(field)
        return self

    # ==================== Sub-queries ====================

    def exists(self, subquery: str, *values: Any) -> "Where":
        """Append ``EXISTS (subquery)``."""
        if not subquery:
            return self._skip("EXISTS", "empty subquery")
        return self.add(f"EXISTS ({subquery})", *values)

    def exists_if(self, condition: bool, subquery: str, *values: Any) -> "Where":
        if condition:
            return self.exists(subquery, *values)
        return self

    def not_exists(self, subquery: str, *values: Any) -> "Where":
        """Append ``NOT EXISTS (subquery)``."""
        if not subquery:
            return self._skip("NOT EXISTS", "empty subquery")
        return self.add(f"NOT EXISTS ({subquery})", *values)

    def not_exists_if(self, condition: bool, subquery: str, *values: Any) -> "Where":
        if condition:
            return self.not_exists(subquery, *values)
        return self

    # ==================== Groups ====================

    def group(self, build_fn: Optional[GroupBuilder]) -> "Where":
        """Append the fragments built by ``build_fn`` as one parenthesized ``AND`` group.

        Nothing is appended when ``build_fn`` adds no fragment.
        """
        grouped = self._build_group("group", build_fn)
        if grouped is None:
            return self
        fragment, values = grouped
        self._fragments.append(fragment)
        self._values.extend(values)
        return self

    def group_if(self, condition: bool, build_fn: Optional[GroupBuilder]) -> "Where":
        if condition:
            return self.group(build_fn)
        return self

    def or_group(self, build_fn: Optional[GroupBuilder]) -> "Where":
        """OR the group built by ``build_fn`` with the last fragment."""
        grouped = self._build_group("or_group", build_fn)
        if grouped is None:
            return self
        fragment, values = grouped
        if self._fragments:
            self._fragments[-1] = f"({self._fragments[-1]}) OR {fragment}"
        else:
            self._fragments.append(fragment)
        self._values.extend(values)
        return self

    def or_group_if(self, condition: bool, build_fn: Optional[GroupBuilder]) -> "Where":
        if condition:
            return self.or_group(build_fn)
        return self

    def _build_group(
        self,
        operation: str,
        build_fn: Optional[GroupBuilder],
    ) -> Optional[Tuple[str, List[Any]]]:
        if build_fn is None:
            self._skip(operation, "missing group builder")
            return None
        sub = Where(strict=self.strict)
        build_fn(sub)
        if sub.is_empty():
            self._skip(operation, "group produced no fragments")
            return None
        return f"({' AND '.join(sub.fragments)})", list(sub.values)

    # ==================== State ====================

    def clear(self) -> "Where":
        """Drop every fragment and value."""
        self._fragments = []
        self._values = []
        return self

    def is_empty(self) -> bool:
        return not self._fragments

    @property
    def fragments(self) -> List[str]:
        """Copy of the accumulated fragments."""
        return list(self._fragments)

    @property
    def values(self) -> List[Any]:
        """Copy of the accumulated values, in placeholder order."""
        return list(self._values)

    def build(self) -> Tuple[str, List[Any]]:
        """Return the ``AND``-joined fragments and the flattened values.

        Returns:
            ``("", [])`` for an empty builder.
        """
        if not self._fragments:
            return "", []
        return " AND ".join(self._fragments), list(self._values)

    def __str__(self) -> str:
        return " AND ".join(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)

    def __bool__(self) -> bool:
        return bool(self._fragments)

    def __repr__(self) -> str:
        return f"Where({str(self)!r}, values={self._values!r})"

    def _skip(self, operation: str, reason: str) -> "Where":
        if self.strict:
            raise BuilderError(f"{operation}: {reason}", operation=operation)
        return self


def _as_value_list(values: Any) -> List[Any]:
    """Materialize ``values`` into a list, or return ``[]`` for non-sequences."""
    if values is None:
        return []
    if isinstance(values, (str, bytes, bytearray, Mapping)):
        return []
    if not isinstance(values, Iterable):
        return []
    return list(values)
