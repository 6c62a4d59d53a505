"""Dashboard statistics.

Everything here is a pure function of a FarmState snapshot and is cheap
enough to recompute on every read.
"""

from farmledger.domain.entities import DashboardStats, FarmState
from farmledger.domain.inventory import is_low_stock
from farmledger.domain.transaction import summarize


def mortality_rate(total_mortality: int, initial_birds: int) -> float:
    """Deaths as a percentage of birds placed; 0.0 when none were placed."""
    if initial_birds <= 0:
        return 0.0
    return total_mortality / initial_birds * 100


def compute_dashboard_stats(state: FarmState) -> DashboardStats:
    """Compute the dashboard figures for ``state``."""
    total_birds = sum(flock.current_count for flock in state.flocks)
    initial_birds = sum(flock.initial_count for flock in state.flocks)
    total_mortality = sum(flock.total_mortality for flock in state.flocks)
    totals = summarize(state.transactions)

    return DashboardStats(
        total_birds=total_birds,
        initial_birds=initial_birds,
        total_mortality=total_mortality,
        mortality_rate=mortality_rate(total_mortality, initial_birds),
        low_stock_count=sum(1 for item in state.inventory if is_low_stock(item)),
        total_income=totals.total_income,
        total_expense=totals.total_expense,
        balance=totals.balance,
    )
