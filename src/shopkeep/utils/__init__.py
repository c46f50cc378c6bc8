"""Utility functions for shopkeep."""

from shopkeep.utils.date_parser import parse_datetime
from shopkeep.utils.amount_parser import parse_amount, parse_quantity
from shopkeep.utils.resolvers import resolve_product, resolve_customer

__all__ = [
    "parse_datetime",
    "parse_amount",
    "parse_quantity",
    "resolve_product",
    "resolve_customer",
]
