"""Predicate and ordering builders."""

from sqlpager.builder.order import Order
from sqlpager.builder.where import Where

__all__ = [
    "Order",
    "Where",
]
