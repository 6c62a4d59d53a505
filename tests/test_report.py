"""Tests for batch reports."""

from datetime import date
from decimal import Decimal

from farmledger.domain.entities import Category, TransactionType
from farmledger.domain.report import build_batch_report, render_batch_report


def _spend(service, flock_id, category, amount, type=TransactionType.EXPENSE):
    return service.add_transaction(
        date=date(2024, 1, 10), type=type, category=category, amount=Decimal(amount), flock_id=flock_id
    )


def test_report_totals(ledger, transaction_service, flock_service, sample_flock):
    """Test cost split, income and net profit for one batch."""
    _spend(transaction_service, sample_flock.id, Category.FEED, "5000")
    _spend(transaction_service, sample_flock.id, Category.MEDICINE, "800")
    _spend(transaction_service, sample_flock.id, Category.LABOR, "1200")
    _spend(transaction_service, sample_flock.id, Category.SALES, "10000", type=TransactionType.INCOME)
    _spend(transaction_service, None, Category.FEED, "999")
    _spend(transaction_service, "other-flock", Category.FEED, "111")
    flock_service.record_weight(sample_flock.id, date(2024, 1, 20), Decimal("1450"), 20)

    flock = flock_service.require_flock(sample_flock.id)
    report = build_batch_report(flock, ledger.state.transactions)

    assert report.feed_cost == Decimal("5000")
    assert report.medicine_cost == Decimal("800")
    assert report.other_cost == Decimal("1200")
    assert report.total_cost == report.feed_cost + report.medicine_cost + report.other_cost
    assert report.income == Decimal("10000")
    assert report.net_profit == Decimal("3000")
    assert len(report.transactions) == 4
    assert report.latest_weight == Decimal("1450")


def test_render_loss(sample_flock, transaction_service, ledger):
    """Test that a batch costing more than it earned renders as a loss."""
    _spend(transaction_service, sample_flock.id, Category.CHICKEN_PURCHASE, "25000")

    text = render_batch_report(build_batch_report(sample_flock, ledger.state.transactions))

    assert "BATCH REPORT: Batch A" in text
    assert "NET LOSS" in text
    assert "CHICKEN_PURCHASE" in text
    assert "25,000.00" in text


def test_render_without_transactions(sample_flock):
    """Test rendering a batch with no attributed transactions."""
    text = render_batch_report(build_batch_report(sample_flock, []))

    assert "NET PROFIT" in text
    assert "Latest weight:      -" in text
    assert "Date" not in text
