"""Amount parsing and numeric coercion utilities."""

from decimal import Decimal, InvalidOperation
import math
import re

ZERO = Decimal("0")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "৳123.45" or "$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[৳$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    return -amount if is_negative else amount


def coerce_decimal(value) -> Decimal:
    """Convert a loosely typed numeric value to Decimal.

    Missing, empty, NaN and unparsable values become zero instead of raising.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return ZERO
        return Decimal(str(value))
    try:
        return parse_amount(str(value))
    except ValueError:
        return ZERO


def coerce_quantity(value) -> Decimal:
    """Coerce to a non-negative Decimal quantity."""
    return max(ZERO, coerce_decimal(value))


def coerce_count(value) -> int:
    """Coerce to a non-negative whole number of birds."""
    return max(0, int(coerce_decimal(value)))
