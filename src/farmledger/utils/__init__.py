"""Utility functions for farmledger."""

from farmledger.utils.date_parser import parse_date, coerce_date, get_date_range
from farmledger.utils.amount_parser import parse_amount, coerce_decimal, coerce_quantity, coerce_count
from farmledger.utils.units import to_kilograms, from_kilograms

__all__ = [
    "parse_date",
    "coerce_date",
    "get_date_range",
    "parse_amount",
    "coerce_decimal",
    "coerce_quantity",
    "coerce_count",
    "to_kilograms",
    "from_kilograms",
]
