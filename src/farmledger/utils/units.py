"""Feed unit conversion.

Kilograms are the canonical mass unit. A bag is a fixed 50 kg sack; any
other unit is taken to already be in kilograms.
"""

from decimal import Decimal

KG_PER_BAG = Decimal("50")

BAG_UNITS = frozenset({"bag", "bags", "বস্তা"})


def is_bag(unit: str) -> bool:
    """Return True if ``unit`` names the fixed-size bag."""
    return (unit or "").strip().lower() in BAG_UNITS


def to_kilograms(amount: Decimal, unit: str) -> Decimal:
    """Normalize an amount in ``unit`` to kilograms."""
    if is_bag(unit):
        return amount * KG_PER_BAG
    return amount


def from_kilograms(kilograms: Decimal, unit: str) -> Decimal:
    """Express a kilogram amount in ``unit``."""
    if is_bag(unit):
        return kilograms / KG_PER_BAG
    return kilograms
