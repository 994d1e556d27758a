"""Lexical clause classification for SQL text.

This is keyword scanning, not parsing. Keywords inside string literals or
comments are matched like any other text, so a statement such as
``SELECT * FROM t WHERE note = ' GROUP BY '`` is reported as complex. Callers
that need parser-grade answers must not rely on this module.

Keywords are written with the surrounding spaces they need
(``" ORDER BY "``); any run of whitespace in the SQL satisfies a space in the
keyword, so multi-line statements classify the same as one-liners.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Pattern

SELECT = "SELECT "
FROM = " FROM "
WHERE = " WHERE "
ORDER_BY = " ORDER BY "
GROUP_BY = " GROUP BY "
HAVING = " HAVING "
LIMIT = " LIMIT "
OFFSET = " OFFSET "
FETCH = " FETCH "

SUBQUERY_MARKERS = ("(SELECT ", "( SELECT ")

COMPLEX_KEYWORDS = (
    " JOIN ", " LEFT JOIN ", " RIGHT JOIN ", " INNER JOIN ", " OUTER JOIN ",
    " CROSS JOIN ", " FULL JOIN ",
    GROUP_BY, HAVING, " DISTINCT ", " UNION ", " INTERSECT ", " EXCEPT ",
)

_TABLE_NAME = re.compile(r'^\s*[\w$#]+(?:\.[\w$#]+)*\s*$|^\s*(?:[`"\[][^`"\]]+[`"\]]\.?)+\s*$')


@dataclass(frozen=True)
class ClauseProfile:
    """Which clauses a SQL fragment already contains."""

    has_select: bool
    has_from: bool
    has_where: bool
    has_order_by: bool
    is_complex: bool

    @property
    def is_statement(self) -> bool:
        """True when the fragment carries both ``SELECT`` and ``FROM``."""
        return self.has_select and self.has_from


@lru_cache(maxsize=64)
def keyword_pattern(keyword: str) -> Pattern[str]:
    """Compile ``keyword`` into a case-insensitive, whitespace-tolerant pattern."""
    parts = [re.escape(word) for word in keyword.split()]
    body = r"\s+".join(parts)
    if keyword.startswith("( "):
        body = r"\(\s*" + r"\s+".join(parts[1:])
    if keyword[:1].isspace():
        body = r"\s" + body
    if keyword[-1:].isspace():
        body = body + r"\s"
    return re.compile(body, re.IGNORECASE)


def contains_keyword(sql: str, keyword: str) -> bool:
    return keyword_pattern(keyword).search(sql) is not None


def find_keyword(sql: str, keyword: str, start: int = 0) -> int:
    """Return the index of the first ``keyword`` match at or after ``start``, or -1."""
    match = keyword_pattern(keyword).search(sql, start)
    return match.start() if match else -1


def has_subquery(sql: str) -> bool:
    """True when ``sql`` contains a parenthesized ``SELECT``."""
    return any(contains_keyword(sql, marker) for marker in SUBQUERY_MARKERS)


def is_complex(sql: str) -> bool:
    return has_subquery(sql) or any(contains_keyword(sql, kw) for kw in COMPLEX_KEYWORDS)


def classify(sql: str) -> ClauseProfile:
    """Report which clauses ``sql`` contains.

    Args:
        sql: Table name, bare predicate or full statement.

    Returns:
        A :class:`ClauseProfile`; the same text always yields an equal profile.
    """
    text = sql or ""
    # A leading keyword has no whitespace in front of it; pad so " FROM "
    # style keywords also match at position 0.
    padded = f" {text} "
    return ClauseProfile(
        has_select=contains_keyword(padded, SELECT),
        has_from=contains_keyword(padded, FROM),
        has_where=contains_keyword(padded, WHERE),
        has_order_by=contains_keyword(padded, ORDER_BY),
        is_complex=is_complex(padded),
    )


def is_table_name(source: str) -> bool:
    """True for a bare (optionally schema-qualified or quoted) table name."""
    return bool(source) and _TABLE_NAME.match(source) is not None


def starts_statement(source: str) -> bool:
    """True when ``source`` begins like a query rather than a predicate."""
    head = (source or "").lstrip().lstrip("(").lstrip()
    return re.match(r"(SELECT|WITH)\b", head, re.IGNORECASE) is not None


def paren_depths(sql: str) -> List[int]:
    """Nesting depth at every character, ignoring parentheses in ``'...'`` literals.

    An opening parenthesis carries the depth outside it; a closing one carries
    the depth it returns to.
    """
    depths: List[int] = []
    depth = 0
    in_literal = False
    for char in sql:
        if char == "'":
            in_literal = not in_literal
            depths.append(depth)
        elif in_literal:
            depths.append(depth)
        elif char == "(":
            depths.append(depth)
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
            depths.append(depth)
        else:
            depths.append(depth)
    return depths


def clause_end(sql: str, keywords: Iterable[str], start: int = 0) -> int:
    """Find where the clause starting at ``start`` ends.

    Returns the earliest index of one of ``keywords`` at the nesting level of
    ``start``; the index of the parenthesis closing that level when it comes
    first; otherwise ``len(sql)``.
    """
    if start >= len(sql):
        return len(sql)
    depths = paren_depths(sql)
    base = depths[start]
    limit = len(sql)
    for index in range(start, len(sql)):
        if depths[index] < base:
            limit = index
            break

    best = limit
    for keyword in keywords:
        for match in keyword_pattern(keyword).finditer(sql, start, limit):
            if depths[match.start()] == base:
                best = min(best, match.start())
                break
    return best


def find_top_level(sql: str, keyword: str, last: bool = False) -> int:
    """Index of ``keyword`` outside any parentheses, or -1.

    Args:
        last: Return the last top-level match instead of the first.
    """
    depths = paren_depths(sql)
    found = -1
    for match in keyword_pattern(keyword).finditer(sql):
        if depths[match.start()] == 0:
            if not last:
                return match.start()
            found = match.start()
    return found
