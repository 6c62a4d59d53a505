"""Transaction ledger domain service."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from farmledger.domain.entities import Category, Transaction, TransactionType
from farmledger.domain.errors import ValidationError
from farmledger.domain.ledger import FarmLedger
from farmledger.utils.amount_parser import ZERO, coerce_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerTotals:
    """Income, expense and balance over a set of transactions."""

    total_income: Decimal
    total_expense: Decimal
    balance: Decimal


def summarize(transactions: Iterable[Transaction]) -> LedgerTotals:
    """Sum income and expense; balance is their difference."""
    total_income = ZERO
    total_expense = ZERO
    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            total_income += txn.amount
        elif txn.type == TransactionType.EXPENSE:
            total_expense += txn.amount
    return LedgerTotals(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
    )


class TransactionService:
    """Service for managing ledger entries."""

    def __init__(self, ledger: FarmLedger, allow_non_positive_amounts: bool = True):
        """Initialize transaction service.

        Args:
            ledger: FarmLedger instance
            allow_non_positive_amounts: When False, amounts of zero or less
                are rejected
        """
        self.ledger = ledger
        self.allow_non_positive_amounts = allow_non_positive_amounts

    def add_transaction(
        self,
        date: date,
        type: TransactionType,
        category: Category,
        amount: Decimal,
        description: str = "",
        flock_id: Optional[str] = None,
    ) -> Transaction:
        """Record a transaction at the head of the ledger.

        Args:
            date: Transaction date
            type: INCOME or EXPENSE
            category: Ledger category
            amount: Transaction amount; missing or NaN becomes zero
            description: Free text
            flock_id: Optional batch the entry is attributed to

        Returns:
            The created transaction

        Raises:
            ValidationError: If the amount policy rejects the amount
        """
        amount = coerce_decimal(amount)
        if not self.allow_non_positive_amounts and amount <= 0:
            raise ValidationError(f"Amount must be greater than zero, got {amount}")

        txn = Transaction(
            id=self.ledger.next_id(),
            date=date,
            type=TransactionType(type),
            category=Category(category),
            amount=amount,
            description=description or "",
            flock_id=flock_id or None,
        )
        state = self.ledger.state
        self.ledger.commit(replace(state, transactions=(txn,) + state.transactions))
        return txn

    def delete_transaction(self, transaction_id: str) -> bool:
        """Delete a transaction.

        Unknown ids are logged and ignored.

        Returns:
            True if a transaction was removed
        """
        state = self.ledger.state
        remaining = tuple(t for t in state.transactions if t.id != transaction_id)
        if len(remaining) == len(state.transactions):
            logger.info("Transaction %s not found, nothing deleted", transaction_id)
            return False
        self.ledger.commit(
            replace(state, transactions=remaining),
            undo_message=f"Deleted transaction {transaction_id}",
        )
        return True

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        for txn in self.ledger.state.transactions:
            if txn.id == transaction_id:
                return txn
        return None

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        flock_id: Optional[str] = None,
        category: Optional[Category] = None,
    ) -> list[Transaction]:
        """List transactions, most recent first, with optional filters."""
        results = []
        for txn in self.ledger.state.transactions:
            if start_date is not None and txn.date < start_date:
                continue
            if end_date is not None and txn.date > end_date:
                continue
            if flock_id is not None and txn.flock_id != flock_id:
                continue
            if category is not None and txn.category != category:
                continue
            results.append(txn)
        return results

    def recent(self, limit: int) -> list[Transaction]:
        """Return the ``limit`` most recently recorded transactions."""
        return list(self.ledger.state.transactions[: max(0, limit)])

    def flock_name_for(self, txn: Transaction) -> Optional[str]:
        """Resolve the attributed batch name, or None if missing or dangling."""
        if txn.flock_id is None:
            return None
        for flock in self.ledger.state.flocks:
            if flock.id == txn.flock_id:
                return flock.batch_name
        return None

    def get_summary(self, transactions: Optional[Iterable[Transaction]] = None) -> LedgerTotals:
        """Totals over ``transactions`` (default: the whole ledger)."""
        if transactions is None:
            transactions = self.ledger.state.transactions
        return summarize(transactions)
