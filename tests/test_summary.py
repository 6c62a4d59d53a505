"""Tests for dashboard statistics."""

import pytest
from datetime import date
from decimal import Decimal

from farmledger.domain.entities import Category, FarmState, TransactionType
from farmledger.domain.summary import compute_dashboard_stats, mortality_rate


def test_empty_farm():
    """Test stats for a farm with nothing recorded."""
    stats = compute_dashboard_stats(FarmState())

    assert stats.total_birds == 0
    assert stats.total_mortality == 0
    assert stats.mortality_rate == 0.0
    assert stats.low_stock_count == 0
    assert stats.balance == Decimal("0")


def test_mortality_rate_without_birds():
    """Test that no placed birds gives a zero rate instead of dividing by zero."""
    assert mortality_rate(5, 0) == 0.0
    assert mortality_rate(25, 1000) == pytest.approx(2.5)


def test_stats_across_flocks(ledger, flock_service, inventory_service, transaction_service):
    """Test that stats sum over every flock, item and transaction."""
    first = flock_service.create_flock("A", "", 300, date(2024, 1, 1))
    second = flock_service.create_flock("B", "", 200, date(2024, 1, 1))
    flock_service.record_mortality(first.id, date(2024, 1, 2), 15)
    flock_service.record_mortality(second.id, date(2024, 1, 2), 10)
    inventory_service.add_item("Starter", Category.FEED, Decimal("1"), "bag", Decimal("2"))
    inventory_service.add_item("Vaccine", Category.MEDICINE, Decimal("5"), "vial", Decimal("5"))
    transaction_service.add_transaction(
        date=date(2024, 1, 3), type=TransactionType.INCOME, category=Category.SALES, amount=Decimal("9000")
    )
    transaction_service.add_transaction(
        date=date(2024, 1, 3), type=TransactionType.EXPENSE, category=Category.FEED, amount=Decimal("4000")
    )

    stats = compute_dashboard_stats(ledger.state)

    assert stats.total_birds == 475
    assert stats.initial_birds == 500
    assert stats.total_mortality == 25
    assert stats.mortality_rate == pytest.approx(5.0)
    assert stats.low_stock_count == 1
    assert stats.total_income == Decimal("9000")
    assert stats.total_expense == Decimal("4000")
    assert stats.balance == Decimal("5000")
