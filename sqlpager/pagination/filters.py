"""Conversion of caller filter input into a predicate fragment."""

from collections.abc import Mapping
from typing import Any, List, Tuple

from sqlpager.builder import Where
from sqlpager.exceptions import ConfigurationError


def where_from_mapping(filters: Mapping) -> Where:
    """Render ``{field: value}`` as ``field = ?`` conditions.

    Conditions follow the mapping's iteration order, which for ``dict`` is
    insertion order.
    """
    where = Where()
    for field_name, value in filters.items():
        where.add(f"{field_name} = ?", value)
    return where


def resolve_filter(filter_input: Any) -> Tuple[str, List[Any]]:
    """Return the predicate fragment and values for ``filter_input``.

    Accepts ``None``, predicate text, a mapping of equality conditions or a
    :class:`~sqlpager.builder.Where`.

    Raises:
        ConfigurationError: For any other input type.
    """
    if filter_input is None:
        return "", []
    if isinstance(filter_input, Where):
        return filter_input.build()
    if isinstance(filter_input, str):
        return filter_input.strip(), []
    if isinstance(filter_input, Mapping):
        return where_from_mapping(filter_input).build()
    raise ConfigurationError(
        f"Unsupported filter type: {type(filter_input).__name__}",
        details={'expected': 'str, mapping or Where'},
    )
