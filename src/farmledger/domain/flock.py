"""Flock domain service: batches, their logs, and feed reconciliation."""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from farmledger.domain.entities import FarmState, FeedLog, Flock, MortalityLog, WeightLog
from farmledger.domain.errors import (
    NotFoundError,
    ValidationError,
    flock_not_found,
    protected_flock_fields,
)
from farmledger.domain.feed_matching import FeedStockMatcher, first_feed_item
from farmledger.domain.ledger import FarmLedger
from farmledger.utils.amount_parser import ZERO, coerce_count, coerce_quantity
from farmledger.utils.units import from_kilograms, to_kilograms

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"batch_name", "breed", "start_date"})
LOG_FIELDS = frozenset({"weight_logs", "mortality_logs", "feed_logs"})
PROTECTED_FIELDS = frozenset({"id", "initial_count", "current_count"})


def _replace_flock(state: FarmState, flock: Flock) -> FarmState:
    return replace(state, flocks=tuple(flock if f.id == flock.id else f for f in state.flocks))


class FlockService:
    """Service for managing flocks and the events recorded against them."""

    def __init__(self, ledger: FarmLedger, feed_matcher: FeedStockMatcher = first_feed_item):
        """Initialize flock service.

        Args:
            ledger: FarmLedger instance
            feed_matcher: Picks the inventory line a feed entry draws down
        """
        self.ledger = ledger
        self.feed_matcher = feed_matcher

    def create_flock(
        self,
        batch_name: str,
        breed: str,
        initial_count: int,
        start_date: date,
    ) -> Flock:
        """Create a flock with empty logs and ``current_count == initial_count``.

        Raises:
            ValidationError: If batch name is empty
        """
        batch_name = (batch_name or "").strip()
        if not batch_name:
            raise ValidationError("Batch name is required")

        initial_count = coerce_count(initial_count)
        flock = Flock(
            id=self.ledger.next_id(),
            batch_name=batch_name,
            breed=(breed or "").strip(),
            start_date=start_date,
            initial_count=initial_count,
            current_count=initial_count,
        )
        state = self.ledger.state
        self.ledger.commit(replace(state, flocks=(flock,) + state.flocks))
        return flock

    def get_flock(self, flock_id: str) -> Optional[Flock]:
        """Get flock by ID."""
        for flock in self.ledger.state.flocks:
            if flock.id == flock_id:
                return flock
        return None

    def require_flock(self, flock_id: str) -> Flock:
        """Get flock by ID or raise NotFoundError."""
        flock = self.get_flock(flock_id)
        if flock is None:
            raise NotFoundError(flock_not_found(flock_id))
        return flock

    def list_flocks(self) -> list[Flock]:
        """List all flocks, newest first."""
        return list(self.ledger.state.flocks)

    def update_flock(self, flock_id: str, **fields: Any) -> Flock:
        """Merge descriptive fields into a flock.

        Log collections in ``fields`` are dropped so history can never be
        replaced through this path. Counts cannot be edited here.

        Args:
            flock_id: Flock ID
            **fields: Any of batch_name, breed, start_date

        Returns:
            The updated flock

        Raises:
            NotFoundError: If the flock doesn't exist
            ValidationError: If fields name counts, the id, or unknown attributes
        """
        flock = self.require_flock(flock_id)

        protected = [name for name in fields if name in PROTECTED_FIELDS]
        if protected:
            raise ValidationError(protected_flock_fields(protected))

        ignored = [name for name in fields if name in LOG_FIELDS]
        if ignored:
            logger.debug("Ignoring log collections in flock update: %s", ", ".join(ignored))

        changes = {name: value for name, value in fields.items() if name not in LOG_FIELDS}
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown flock fields: {', '.join(sorted(unknown))}")

        if "batch_name" in changes:
            changes["batch_name"] = (changes["batch_name"] or "").strip()
            if not changes["batch_name"]:
                raise ValidationError("Batch name is required")
        if "breed" in changes:
            changes["breed"] = (changes["breed"] or "").strip()

        updated = replace(flock, **changes)
        self.ledger.commit(_replace_flock(self.ledger.state, updated))
        return updated

    def set_current_count(self, flock_id: str, count: int) -> Flock:
        """Administrative override of the live bird count.

        Breaks the link between ``current_count`` and the mortality logs, so
        it is logged as a warning.
        """
        flock = self.require_flock(flock_id)
        count = coerce_count(count)
        logger.warning(
            "Overriding bird count for %s from %d to %d", flock.batch_name, flock.current_count, count
        )
        updated = replace(flock, current_count=count)
        self.ledger.commit(_replace_flock(self.ledger.state, updated))
        return updated

    def delete_flock(self, flock_id: str) -> None:
        """Delete a flock together with all of its logs.

        Transactions attributed to the flock are left untouched.

        Raises:
            NotFoundError: If the flock doesn't exist
        """
        flock = self.require_flock(flock_id)
        state = self.ledger.state
        self.ledger.commit(
            replace(state, flocks=tuple(f for f in state.flocks if f.id != flock_id)),
            undo_message=f"Deleted flock {flock.batch_name}",
        )

    def record_mortality(
        self,
        flock_id: str,
        date: date,
        count: int,
        reason: Optional[str] = None,
    ) -> MortalityLog:
        """Append a mortality log and lower the live count in one commit.

        ``count`` is coerced to a non-negative integer; the live count never
        drops below zero.
        """
        flock = self.require_flock(flock_id)
        log = MortalityLog(
            id=self.ledger.next_id(),
            date=date,
            count=coerce_count(count),
            reason=(reason or "").strip() or None,
        )
        updated = replace(
            flock,
            mortality_logs=flock.mortality_logs + (log,),
            current_count=max(0, flock.current_count - log.count),
        )
        self.ledger.commit(_replace_flock(self.ledger.state, updated))
        return log

    def record_weight(
        self,
        flock_id: str,
        date: date,
        average_weight: Decimal,
        sample_size: int,
    ) -> WeightLog:
        """Append a weight sample. No other record changes."""
        flock = self.require_flock(flock_id)
        log = WeightLog(
            id=self.ledger.next_id(),
            date=date,
            average_weight=coerce_quantity(average_weight),
            sample_size=coerce_count(sample_size),
        )
        updated = replace(flock, weight_logs=flock.weight_logs + (log,))
        self.ledger.commit(_replace_flock(self.ledger.state, updated))
        return log

    @staticmethod
    def latest_weight(flock: Flock) -> Optional[WeightLog]:
        """The most recently appended weight log, regardless of its date."""
        return flock.weight_logs[-1] if flock.weight_logs else None

    def record_feed(self, flock_id: str, date: date, amount: Decimal, unit: str) -> FeedLog:
        """Append a feed log and draw the consumption down from stock.

        The amount is normalized to kilograms (1 bag = 50 kg), converted into
        the matched item's unit, and subtracted with a floor of zero. When no
        feed item matches, only the log is recorded.
        """
        flock = self.require_flock(flock_id)
        unit = (unit or "kg").strip()
        log = FeedLog(id=self.ledger.next_id(), date=date, amount=coerce_quantity(amount), unit=unit)

        state = _replace_flock(self.ledger.state, replace(flock, feed_logs=flock.feed_logs + (log,)))

        item = self.feed_matcher(state.inventory)
        if item is None:
            logger.warning(
                "No feed stock found for %s %s fed to %s; inventory not adjusted",
                log.amount,
                log.unit,
                flock.batch_name,
            )
        else:
            consumed = from_kilograms(to_kilograms(log.amount, log.unit), item.unit)
            remaining = max(ZERO, item.current_quantity - consumed)
            logger.debug("Feed stock %s: %s -> %s %s", item.name, item.current_quantity, remaining, item.unit)
            adjusted = replace(item, current_quantity=remaining)
            state = replace(
                state,
                inventory=tuple(adjusted if i.id == item.id else i for i in state.inventory),
            )

        self.ledger.commit(state)
        return log
