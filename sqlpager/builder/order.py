"""ORDER BY builder."""

from decimal import Decimal
from typing import Any, Iterable, Optional

DEFAULT_RANDOM_FUNCTION = "RAND()"


class Order:
    """Chainable ``ORDER BY`` builder.

    Setting operations (``order_by``, ``asc``, ``desc``, ``multiple``,
    ``by_field``, ``random``) replace the current ordering; ``append`` adds
    one more comma-separated key.
    """

    def __init__(self, random_function: str = DEFAULT_RANDOM_FUNCTION) -> None:
        """Initialize an empty ordering.

        Args:
            random_function: SQL expression used by :meth:`random`. Dialect
                strategies hand out builders with their own function through
                ``strategy.new_order()``.
        """
        self.random_function = random_function
        self._order_by = ""

    def order_by(self, fragment: str) -> "Order":
        """Replace the ordering with ``fragment`` (e.g. ``"id DESC"``)."""
        if fragment:
            self._order_by = fragment
        return self

    def order_by_if(self, condition: bool, fragment: str) -> "Order":
        if condition:
            return self.order_by(fragment)
        return self

    def asc(self, field: str) -> "Order":
        if field:
            self._order_by = f"{field} ASC"
        return self

    def asc_if(self, condition: bool, field: str) -> "Order":
        if condition:
            return self.asc(field)
        return self

    def desc(self, field: str) -> "Order":
        if field:
            self._order_by = f"{field} DESC"
        return self

    def desc_if(self, condition: bool, field: str) -> "Order":
        if condition:
            return self.desc(field)
        return self

    def multiple(self, fragments: Optional[Iterable[str]]) -> "Order":
        """Replace the ordering with several keys joined by ``", "``."""
        keys = [fragment for fragment in (fragments or []) if fragment]
        if keys:
            self._order_by = ", ".join(keys)
        return self

    def by_field(self, field: str, values: Optional[Iterable[Any]]) -> "Order":
        """Order rows by the position of ``field``'s value in ``values``.

        Emits ``CASE field WHEN v1 THEN 0 WHEN v2 THEN 1 ... END``; strings are
        quoted, numbers are left bare.
        """
        items = list(values or [])
        if not field or not items:
            return self
        cases = " ".join(
            f"WHEN {_literal(value)} THEN {index}" for index, value in enumerate(items)
        )
        self._order_by = f"CASE {field} {cases} END"
        return self

    def random(self) -> "Order":
        """Replace the ordering with the dialect's random function."""
        self._order_by = self.random_function
        return self

    def append(self, fragment: str) -> "Order":
        """Add ``fragment`` as an extra ordering key."""
        if fragment:
            self._order_by = f"{self._order_by}, {fragment}" if self._order_by else fragment
        return self

    def append_if(self, condition: bool, fragment: str) -> "Order":
        if condition:
            return self.append(fragment)
        return self

    def clear(self) -> "Order":
        self._order_by = ""
        return self

    def is_empty(self) -> bool:
        return not self._order_by

    @property
    def fragment(self) -> str:
        """The ordering keys without the ``ORDER BY`` prefix."""
        return self._order_by

    def build(self) -> str:
        """Return ``"ORDER BY <keys>"`` or ``""`` when nothing is set."""
        if not self._order_by:
            return ""
        return f"ORDER BY {self._order_by}"

    def __str__(self) -> str:
        return self.build()

    def __repr__(self) -> str:
        return f"Order({self._order_by!r})"


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    text = str(value).replace("'", "''")
    return f"'{text}'"
