"""Domain model entities for farmledger.

These are pure data classes representing farm records, independent of how
they are persisted. Mutations never edit an entity in place; services build a
replacement with ``dataclasses.replace`` and hand a new ``FarmState`` to the
ledger.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a ledger entry."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class Category(str, Enum):
    """Ledger and inventory categories."""

    FEED = "FEED"
    MEDICINE = "MEDICINE"
    CHICKEN_PURCHASE = "CHICKEN_PURCHASE"
    SALES = "SALES"
    UTILITIES = "UTILITIES"
    LABOR = "LABOR"
    OTHER = "OTHER"


INVENTORY_CATEGORIES = (Category.FEED, Category.MEDICINE)


@dataclass(frozen=True)
class Transaction:
    """Ledger entry. Immutable once created."""

    id: str
    date: date
    type: TransactionType
    category: Category
    amount: Decimal
    description: str = ""
    flock_id: Optional[str] = None


@dataclass(frozen=True)
class WeightLog:
    """Average weight sample in grams."""

    id: str
    date: date
    average_weight: Decimal
    sample_size: int


@dataclass(frozen=True)
class MortalityLog:
    """Deaths recorded against a flock."""

    id: str
    date: date
    count: int
    reason: Optional[str] = None


@dataclass(frozen=True)
class FeedLog:
    """Feed consumed by a flock."""

    id: str
    date: date
    amount: Decimal
    unit: str


@dataclass(frozen=True)
class Flock:
    """Batch of birds with its owned logs.

    ``current_count`` is derived from ``initial_count`` and the mortality logs;
    only mortality recording (and the explicit administrative override) moves it.
    """

    id: str
    batch_name: str
    breed: str
    start_date: date
    initial_count: int
    current_count: int
    weight_logs: tuple[WeightLog, ...] = ()
    mortality_logs: tuple[MortalityLog, ...] = ()
    feed_logs: tuple[FeedLog, ...] = ()

    @property
    def total_mortality(self) -> int:
        return sum(log.count for log in self.mortality_logs)


@dataclass(frozen=True)
class InventoryItem:
    """Stock line for feed or medicine."""

    id: str
    name: str
    category: Category
    current_quantity: Decimal
    unit: str
    min_threshold: Decimal


@dataclass(frozen=True)
class FarmState:
    """Aggregate root: the unit of persistence and of AI analysis.

    Transactions are kept most-recent-first.
    """

    transactions: tuple[Transaction, ...] = ()
    flocks: tuple[Flock, ...] = ()
    inventory: tuple[InventoryItem, ...] = ()


@dataclass(frozen=True)
class DashboardStats:
    """Aggregate statistics shown on the dashboard."""

    total_birds: int
    initial_birds: int
    total_mortality: int
    mortality_rate: float
    low_stock_count: int
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal


@dataclass(frozen=True)
class BatchReport:
    """Per-flock cost attribution for the printable report."""

    flock_id: str
    batch_name: str
    breed: str
    start_date: date
    initial_count: int
    current_count: int
    total_mortality: int
    latest_weight: Optional[Decimal]
    feed_cost: Decimal
    medicine_cost: Decimal
    other_cost: Decimal
    income: Decimal
    transactions: tuple[Transaction, ...] = ()

    @property
    def total_cost(self) -> Decimal:
        return self.feed_cost + self.medicine_cost + self.other_cost

    @property
    def net_profit(self) -> Decimal:
        return self.income - self.total_cost


@dataclass(frozen=True)
class FarmInsights:
    """Structured advisor reply."""

    summary: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    recommendations: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "summary": self.summary,
            "warnings": list(self.warnings),
            "recommendations": list(self.recommendations),
        }
