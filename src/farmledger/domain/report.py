"""Printable per-batch report."""

from typing import Iterable

from farmledger.domain.entities import BatchReport, Category, Flock, Transaction, TransactionType
from farmledger.utils.amount_parser import ZERO


def build_batch_report(flock: Flock, transactions: Iterable[Transaction]) -> BatchReport:
    """Attribute ledger entries to ``flock`` and total them.

    Only transactions whose ``flock_id`` is the flock's id count. Expenses
    split into feed, medicine and everything else; income is all INCOME
    entries for the flock.
    """
    attributed = tuple(t for t in transactions if t.flock_id == flock.id)

    feed_cost = medicine_cost = other_cost = income = ZERO
    for txn in attributed:
        if txn.type == TransactionType.INCOME:
            income += txn.amount
        elif txn.category == Category.FEED:
            feed_cost += txn.amount
        elif txn.category == Category.MEDICINE:
            medicine_cost += txn.amount
        else:
            other_cost += txn.amount

    latest = flock.weight_logs[-1].average_weight if flock.weight_logs else None

    return BatchReport(
        flock_id=flock.id,
        batch_name=flock.batch_name,
        breed=flock.breed,
        start_date=flock.start_date,
        initial_count=flock.initial_count,
        current_count=flock.current_count,
        total_mortality=flock.total_mortality,
        latest_weight=latest,
        feed_cost=feed_cost,
        medicine_cost=medicine_cost,
        other_cost=other_cost,
        income=income,
        transactions=attributed,
    )


def render_batch_report(report: BatchReport, currency: str = "৳") -> str:
    """Render a report as a fixed-width text document for printing."""
    width = 60
    lines = [
        "=" * width,
        f"BATCH REPORT: {report.batch_name}".center(width),
        "=" * width,
        f"{'Breed:':<20}{report.breed or '-'}",
        f"{'Start date:':<20}{report.start_date.isoformat()}",
        f"{'Birds placed:':<20}{report.initial_count:,}",
        f"{'Birds alive:':<20}{report.current_count:,}",
        f"{'Mortality:':<20}{report.total_mortality:,}",
        f"{'Latest weight:':<20}{f'{report.latest_weight:,.0f} g' if report.latest_weight is not None else '-'}",
        "-" * width,
        f"{'Feed cost':<40}{currency}{report.feed_cost:>15,.2f}",
        f"{'Medicine cost':<40}{currency}{report.medicine_cost:>15,.2f}",
        f"{'Other cost':<40}{currency}{report.other_cost:>15,.2f}",
        f"{'Total cost':<40}{currency}{report.total_cost:>15,.2f}",
        f"{'Income':<40}{currency}{report.income:>15,.2f}",
        "-" * width,
        f"{'NET PROFIT' if report.net_profit >= 0 else 'NET LOSS':<40}{currency}{report.net_profit:>15,.2f}",
        "=" * width,
    ]
    if report.transactions:
        lines.append("")
        lines.append(f"{'Date':<12}{'Type':<9}{'Category':<18}{'Amount':>14}")
        for txn in report.transactions:
            lines.append(
                f"{txn.date.isoformat():<12}{txn.type.value:<9}{txn.category.value:<18}{txn.amount:>14,.2f}"
            )
    return "\n".join(lines)
