"""Parameter placeholder styles and conversions.

Builders and callers write ``?`` placeholders. Strategies render them into
the dialect's style; the SQLAlchemy adapters convert rendered statements
into ``:p1``-style named binds that ``sqlalchemy.text`` understands.
Text inside single-quoted literals is never touched.
"""

import re
from enum import Enum
from typing import Any, Dict, Iterator, Sequence, Tuple

_LITERAL = re.compile(r"'(?:[^']|'')*'")
_QMARK = re.compile(r"\?")

BIND_PREFIX = "p"


class PlaceholderStyle(str, Enum):
    """How a dialect spells positional parameters."""
    QMARK = "qmark"            # ?
    DOLLAR = "dollar"          # $1, $2, ...
    AT_NAMED = "at_named"      # @p1, @p2, ...
    COLON_NUMERIC = "colon"    # :1, :2, ...

    def token(self, position: int) -> str:
        """Spell the ``position``-th (1-based) placeholder."""
        if self is PlaceholderStyle.QMARK:
            return "?"
        if self is PlaceholderStyle.DOLLAR:
            return f"${position}"
        if self is PlaceholderStyle.AT_NAMED:
            return f"@p{position}"
        return f":{position}"


_NUMBERED_PATTERNS = {
    PlaceholderStyle.DOLLAR: re.compile(r"\$(\d+)"),
    PlaceholderStyle.AT_NAMED: re.compile(r"@p(\d+)", re.IGNORECASE),
    PlaceholderStyle.COLON_NUMERIC: re.compile(r"(?<![:\w]):(\d+)\b"),
}


def _segments(sql: str) -> Iterator[Tuple[bool, str]]:
    """Split ``sql`` into ``(is_literal, text)`` pieces."""
    position = 0
    for match in _LITERAL.finditer(sql):
        if match.start() > position:
            yield False, sql[position:match.start()]
        yield True, match.group(0)
        position = match.end()
    if position < len(sql):
        yield False, sql[position:]


def count_placeholders(sql: str) -> int:
    """Number of ``?`` placeholders outside string literals."""
    return sum(
        len(_QMARK.findall(text)) for is_literal, text in _segments(sql) if not is_literal
    )


def render(sql: str, style: PlaceholderStyle) -> str:
    """Rewrite ``?`` placeholders into ``style``, numbering from 1."""
    if style is PlaceholderStyle.QMARK:
        return sql

    counter = 0

    def next_token(_match: "re.Match[str]") -> str:
        nonlocal counter
        counter += 1
        return style.token(counter)

    parts = []
    for is_literal, text in _segments(sql):
        parts.append(text if is_literal else _QMARK.sub(next_token, text))
    return "".join(parts)


def to_named_binds(sql: str, style: PlaceholderStyle, prefix: str = BIND_PREFIX) -> str:
    """Rewrite rendered placeholders into ``:p1``, ``:p2`` ... named binds."""
    parts = []
    if style is PlaceholderStyle.QMARK:
        counter = 0

        def next_bind(_match: "re.Match[str]") -> str:
            nonlocal counter
            counter += 1
            return f":{prefix}{counter}"

        for is_literal, text in _segments(sql):
            parts.append(text if is_literal else _QMARK.sub(next_bind, text))
        return "".join(parts)

    pattern = _NUMBERED_PATTERNS[style]
    for is_literal, text in _segments(sql):
        parts.append(text if is_literal else pattern.sub(rf":{prefix}\1", text))
    return "".join(parts)


def bind_parameters(parameters: Sequence[Any], prefix: str = BIND_PREFIX) -> Dict[str, Any]:
    """Map positional ``parameters`` onto the names produced by :func:`to_named_binds`."""
    return {f"{prefix}{index}": value for index, value in enumerate(parameters, start=1)}
