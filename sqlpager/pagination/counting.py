"""Statement normalization, filter/order injection and count derivation.

Every function here takes SQL text and returns SQL text; nothing is parsed.
Clause positions are found with the keyword scanner in
:mod:`sqlpager.pagination.classifier`, restricted to the top nesting level so
that sub-queries and window definitions are left alone.
"""

import logging
import re
from typing import Any, List, Optional, Sequence, Tuple

from sqlpager.exceptions import ConfigurationError
from sqlpager.pagination.classifier import (
    FETCH,
    FROM,
    GROUP_BY,
    HAVING,
    LIMIT,
    OFFSET,
    ORDER_BY,
    WHERE,
    ClauseProfile,
    classify,
    clause_end,
    contains_keyword,
    find_top_level,
    has_subquery,
    is_table_name,
    starts_statement,
)
from sqlpager.pagination.placeholders import count_placeholders

logger = logging.getLogger(__name__)

DEFAULT_COUNT_ALIAS = "count_table"
DERIVED_TABLE_ALIAS = "paged_source"
NEUTRAL_PREDICATE = "1=1"

TRAILING_CLAUSES = (ORDER_BY, GROUP_BY, HAVING, LIMIT, OFFSET, FETCH)
LIMITING_CLAUSES = (LIMIT, OFFSET, FETCH)
SET_OPERATORS = (" UNION ", " INTERSECT ", " EXCEPT ")
WHERE_TERMINATORS = (GROUP_BY, HAVING, ORDER_BY, LIMIT, OFFSET, FETCH) + SET_OPERATORS

_WITH_CLAUSE = re.compile(r"^\s*WITH\b", re.IGNORECASE)
_ORDER_BY_KEYWORD = re.compile(r"^\s*ORDER\s+BY\s+", re.IGNORECASE)


def _earliest_top_level(sql: str, keywords: Sequence[str]) -> int:
    positions = [p for p in (find_top_level(sql, keyword) for keyword in keywords) if p >= 0]
    return min(positions) if positions else -1


def _insert_before(sql: str, position: int, clause: str) -> str:
    if position < 0:
        return f"{sql.rstrip()} {clause}"
    return f"{sql[:position].rstrip()} {clause}{sql[position:]}"


def normalize_statement(
    source: str,
    table: Optional[str] = None,
    profile: Optional[ClauseProfile] = None,
) -> str:
    """Turn a table name, bare predicate or statement into a full ``SELECT``.

    Args:
        source: Table name, predicate or complete statement.
        table: Table the predicate applies to. When omitted a bare identifier
            in ``source`` is taken as the table itself.
        profile: Classification of ``source``, when the caller already has one.

    Raises:
        ConfigurationError: If a predicate has no table to apply to, or a
            statement has no ``FROM`` clause.
    """
    text = (source or "").strip().rstrip(";").rstrip()
    if not text:
        if not table:
            raise ConfigurationError("A table name or SQL statement is required")
        return f"SELECT * FROM {table}"

    profile = profile or classify(text)
    if starts_statement(text):
        if not profile.has_from:
            raise ConfigurationError(
                "Statement has no FROM clause",
                details={'statement': text},
            )
        return text

    if table is None and is_table_name(text):
        return f"SELECT * FROM {text.strip()}"

    if not table:
        raise ConfigurationError(
            "A table name is required to paginate a bare predicate",
            details={'predicate': text},
        )
    return f"SELECT * FROM {table} WHERE {text}"


def ensure_where(sql: str) -> str:
    """Make sure ``sql`` has a top-level ``WHERE`` clause.

    ``WHERE 1=1`` is inserted before the earliest trailing clause, or
    appended when there is none.
    """
    if find_top_level(sql, WHERE) >= 0:
        return sql
    return _insert_before(sql, _earliest_top_level(sql, TRAILING_CLAUSES), f"WHERE {NEUTRAL_PREDICATE}")


def has_set_operation(sql: str) -> bool:
    """True when ``sql`` combines selects with a top-level set operator."""
    return _earliest_top_level(sql, SET_OPERATORS) >= 0


def has_limiting_clause(sql: str) -> bool:
    """True when ``sql`` already ends in a top-level ``LIMIT``, ``OFFSET`` or ``FETCH``."""
    return _earliest_top_level(sql, LIMITING_CLAUSES) >= 0


def wrap_statement(sql: str, alias: str = DERIVED_TABLE_ALIAS, alias_keyword: str = "AS ") -> str:
    """Expose ``sql`` as a derived table: ``SELECT * FROM (sql) AS alias``."""
    return f"SELECT * FROM ({sql}) {alias_keyword}{alias}"


def inject_filter(
    sql: str,
    parameters: Sequence[Any],
    fragment: str,
    values: Sequence[Any] = (),
) -> Tuple[str, List[Any]]:
    """Splice ``AND (fragment)`` into the top-level ``WHERE`` clause of ``sql``.

    The filter's ``values`` are inserted into ``parameters`` at the position
    matching the number of placeholders that precede the splice point, so the
    returned parameter list lines up with the rewritten statement.

    Returns:
        The rewritten statement and the combined parameter list.
    """
    params = list(parameters)
    if not fragment:
        return sql, params

    sql = ensure_where(sql)
    where_at = find_top_level(sql, WHERE)
    body_start = where_at + len(" WHERE ")
    end = clause_end(sql, WHERE_TERMINATORS, where_at + 1)

    body = sql[body_start:end].strip()
    if contains_keyword(f" {body} ", " OR "):
        body = f"({body})"
    head = f"{sql[:body_start]}{body}"
    rewritten = f"{head} AND ({fragment}){sql[end:]}"

    index = count_placeholders(head)
    params[index:index] = list(values)
    return rewritten, params


def inject_order(sql: str, order: str) -> str:
    """Add ``ORDER BY order`` before the limiting clause unless ``sql`` is already ordered."""
    if not order or find_top_level(sql, ORDER_BY) >= 0:
        return sql
    return _insert_before(sql, _earliest_top_level(sql, LIMITING_CLAUSES), f"ORDER BY {order}")


def has_top_level_order(sql: str) -> bool:
    return find_top_level(sql, ORDER_BY) >= 0


def strip_order_by(sql: str) -> str:
    """Remove the trailing top-level ``ORDER BY`` from ``sql``.

    The clause runs up to the next ``LIMIT``/``OFFSET``/``FETCH`` or the end
    of the statement. An ordering that binds a parameter is kept so the
    statement still consumes the same parameter sequence.
    """
    start = find_top_level(sql, ORDER_BY, last=True)
    if start < 0:
        return sql
    end = clause_end(sql, LIMITING_CLAUSES, start + 1)
    if count_placeholders(sql[start:end]):
        return sql
    return f"{sql[:start]}{sql[end:]}".rstrip()


def split_order_by(sql: str) -> Tuple[str, str]:
    """Cut a trailing top-level ``ORDER BY`` off ``sql``.

    Returns the statement without the clause and the clause body, e.g.
    ``("SELECT a FROM t UNION SELECT a FROM u", "a DESC")``. The statement is
    returned unchanged with an empty body when the ordering binds a parameter
    or is followed by a limiting clause.
    """
    start = find_top_level(sql, ORDER_BY, last=True)
    if start < 0:
        return sql, ""
    if clause_end(sql, LIMITING_CLAUSES, start + 1) < len(sql):
        return sql, ""
    clause = sql[start:]
    if count_placeholders(clause):
        return sql, ""
    body = _ORDER_BY_KEYWORD.sub("", clause, count=1).strip()
    return sql[:start].rstrip(), body


def derive_count_statement(
    sql: str,
    profile: Optional[ClauseProfile] = None,
    alias: str = DEFAULT_COUNT_ALIAS,
    alias_keyword: str = "AS ",
) -> str:
    """Build the statement counting the rows ``sql`` returns.

    Simple statements have their select list replaced by ``COUNT(*)``; complex
    ones are wrapped: ``SELECT COUNT(*) FROM (sql) AS alias``.

    Args:
        sql: Full statement.
        profile: Classification to use; computed from ``sql`` when omitted.
        alias: Alias of the wrapped statement.
        alias_keyword: Text between the sub-query and the alias; ``""`` for
            dialects that reject ``AS`` before a table alias.

    Raises:
        ConfigurationError: If ``sql`` has no ``FROM`` clause.
    """
    profile = profile or classify(sql)
    if not profile.has_from:
        raise ConfigurationError(
            "Cannot derive a count statement without a FROM clause",
            details={'statement': sql},
        )

    statement = strip_order_by(sql)
    if not profile.is_complex and not _WITH_CLAUSE.match(statement):
        from_at = find_top_level(statement, FROM)
        if from_at >= 0:
            tail = statement[from_at:]
            if not has_subquery(tail) and not count_placeholders(statement[:from_at]):
                return f"SELECT COUNT(*){tail}"
        logger.debug("Falling back to a wrapped count statement")

    return f"SELECT COUNT(*) FROM ({statement}) {alias_keyword}{alias}"
