"""Tests for feed logging and stock reconciliation."""

import pytest
from datetime import date
from decimal import Decimal

from farmledger.domain.entities import Category
from farmledger.domain.feed_matching import first_feed_item, is_feed_item, match_by_id
from farmledger.domain.flock import FlockService


def test_two_bags_then_hundred_kg(flock_service, inventory_service, sample_flock, feed_item):
    """Test 2 bags from 10 leaves 8, then 100 kg (2 bags) leaves 6."""
    flock_service.record_feed(sample_flock.id, date(2024, 1, 5), Decimal("2"), "bag")
    assert inventory_service.require_item(feed_item.id).current_quantity == Decimal("8")

    flock_service.record_feed(sample_flock.id, date(2024, 1, 6), Decimal("100"), "kg")
    assert inventory_service.require_item(feed_item.id).current_quantity == Decimal("6")

    flock = flock_service.require_flock(sample_flock.id)
    assert [(log.amount, log.unit) for log in flock.feed_logs] == [
        (Decimal("2"), "bag"),
        (Decimal("100"), "kg"),
    ]


def test_bags_against_kg_stock(flock_service, inventory_service, sample_flock):
    """Test bag consumption is converted to kg for a kg-denominated item."""
    item = inventory_service.add_item("Grower", Category.FEED, Decimal("500"), "kg", Decimal("100"))

    flock_service.record_feed(sample_flock.id, date(2024, 1, 5), Decimal("3"), "bag")

    assert inventory_service.require_item(item.id).current_quantity == Decimal("350")


def test_consumption_never_below_zero(flock_service, inventory_service, sample_flock, feed_item):
    """Test that consuming more than available clamps stock at zero."""
    flock_service.record_feed(sample_flock.id, date(2024, 1, 5), Decimal("40"), "bag")

    assert inventory_service.require_item(feed_item.id).current_quantity == Decimal("0")


def test_no_feed_stock_still_logs(flock_service, inventory_service, sample_flock, caplog):
    """Test that without feed stock the log is kept and a warning is emitted."""
    medicine = inventory_service.add_item("Vitamin", Category.MEDICINE, Decimal("4"), "bottle", Decimal("1"))

    with caplog.at_level("WARNING"):
        log = flock_service.record_feed(sample_flock.id, date(2024, 1, 5), Decimal("1"), "bag")

    assert flock_service.require_flock(sample_flock.id).feed_logs == (log,)
    assert inventory_service.require_item(medicine.id).current_quantity == Decimal("4")
    assert "No feed stock" in caplog.text


def test_malformed_feed_amount_is_zero(flock_service, inventory_service, sample_flock, feed_item):
    """Test that a malformed amount records a zero-effect log."""
    log = flock_service.record_feed(sample_flock.id, date(2024, 1, 5), "lots", "bag")

    assert log.amount == Decimal("0")
    assert inventory_service.require_item(feed_item.id).current_quantity == Decimal("10")


def test_only_first_match_is_decremented(flock_service, inventory_service, sample_flock):
    """Test that exactly one stock line is drawn down, the first in list order."""
    older = inventory_service.add_item("Finisher", Category.FEED, Decimal("10"), "bag", Decimal("1"))
    newer = inventory_service.add_item("Starter", Category.FEED, Decimal("10"), "bag", Decimal("1"))

    flock_service.record_feed(sample_flock.id, date(2024, 1, 5), Decimal("1"), "bag")

    # New items are added at the head of the list
    assert inventory_service.require_item(newer.id).current_quantity == Decimal("9")
    assert inventory_service.require_item(older.id).current_quantity == Decimal("10")


def test_injected_matcher(ledger, inventory_service, sample_flock):
    """Test that a custom matcher decides which line is drawn down."""
    target = inventory_service.add_item("Finisher", Category.FEED, Decimal("10"), "bag", Decimal("1"))
    other = inventory_service.add_item("Starter", Category.FEED, Decimal("10"), "bag", Decimal("1"))
    service = FlockService(ledger, feed_matcher=match_by_id(target.id))

    service.record_feed(sample_flock.id, date(2024, 1, 5), Decimal("50"), "kg")

    assert inventory_service.require_item(target.id).current_quantity == Decimal("9")
    assert inventory_service.require_item(other.id).current_quantity == Decimal("10")


@pytest.mark.parametrize(
    "name,category,expected",
    [
        ("Broiler Feed", Category.MEDICINE, True),
        ("FEED premix", Category.MEDICINE, True),
        ("মুরগির খাদ্য", Category.MEDICINE, True),
        ("Anything", Category.FEED, True),
        ("Vitamin", Category.MEDICINE, False),
    ],
)
def test_is_feed_item(inventory_service, name, category, expected):
    """Test feed detection by category or name."""
    item = inventory_service.add_item(name, category, Decimal("1"), "kg", Decimal("0"))
    assert is_feed_item(item) is expected


def test_first_feed_item_empty():
    """Test the default matcher on empty inventory."""
    assert first_feed_item([]) is None
