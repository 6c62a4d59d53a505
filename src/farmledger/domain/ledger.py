"""In-memory farm state holder.

The ledger is the single writer of a ``FarmState``. Services compute a new
state and hand it to :meth:`FarmLedger.commit`, which swaps it in and then
persists it. A failed save never rolls the in-memory state back; the error
is kept on ``sync_error`` until :meth:`FarmLedger.retry_sync` succeeds.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Callable, Optional

from farmledger.domain.entities import FarmState
from farmledger.domain.errors import PersistenceError

if TYPE_CHECKING:
    from farmledger.database.base import FarmStore
    from farmledger.database.undo_journal import UndoJournal

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Return a fresh opaque record id."""
    return uuid.uuid4().hex


class FarmLedger:
    """Owns the current FarmState and its persistence."""

    def __init__(
        self,
        store: Optional[FarmStore] = None,
        state: Optional[FarmState] = None,
        id_factory: Callable[[], str] = new_id,
        undo_journal: Optional[UndoJournal] = None,
    ):
        """Initialize the ledger.

        Args:
            store: Persistence collaborator. None keeps everything in memory.
            state: Initial state. Ignored when :meth:`load` is called.
            id_factory: Produces ids for new records
            undo_journal: Keeps the pre-delete snapshot between processes.
                None keeps it in memory only.
        """
        self.store = store
        self.state = state if state is not None else FarmState()
        self.id_factory = id_factory
        self.undo_journal = undo_journal
        self.sync_error: Optional[PersistenceError] = None
        self._undo_state: Optional[FarmState] = None
        self._undo_message: Optional[str] = None

    def load(self) -> FarmState:
        """Replace the in-memory state with what the store holds.

        An unreachable store leaves an empty state and records the error, as
        does a store still holding changes from a failed save.
        """
        if self.store is not None:
            try:
                self.state = self.store.load()
                self.sync_error = None
            except PersistenceError as e:
                logger.error("Could not load farm state: %s", e)
                self.state = FarmState()
                self.sync_error = e
            else:
                if self.store.pending_sync:
                    self.sync_error = PersistenceError("Local changes have not reached the database yet")

        if self.undo_journal is not None:
            entry = self.undo_journal.load()
            if entry is not None:
                self._undo_state, self._undo_message = entry
        return self.state

    def next_id(self) -> str:
        return self.id_factory()

    def commit(self, state: FarmState, undo_message: Optional[str] = None) -> FarmState:
        """Swap in ``state`` and persist it.

        Args:
            state: The new state
            undo_message: When given, the previous state is kept so the change
                can be reverted with :meth:`undo`. Only deletes pass this;
                any other commit discards a pending undo.

        Returns:
            The committed state
        """
        previous = self.state
        self._undo_state = previous if undo_message is not None else None
        self._undo_message = undo_message
        self.state = state
        self._persist()
        self._journal(previous, undo_message)
        return state

    @property
    def can_undo(self) -> bool:
        return self._undo_state is not None

    @property
    def undo_message(self) -> Optional[str]:
        return self._undo_message

    def undo(self) -> bool:
        """Restore the state from before the last delete.

        Returns:
            True if something was restored
        """
        if self._undo_state is None:
            return False
        restored = self._undo_state
        logger.info("Undoing: %s", self._undo_message)
        self._undo_state = None
        self._undo_message = None
        self.state = restored
        self._persist()
        self._journal(restored, None)
        return True

    def retry_sync(self) -> bool:
        """Save the current state again after a failed save.

        Returns:
            True if the store accepted the state
        """
        return self._persist()

    def _journal(self, previous: FarmState, undo_message: Optional[str]) -> None:
        if self.undo_journal is None:
            return
        try:
            if undo_message is None:
                self.undo_journal.clear()
            else:
                self.undo_journal.record(previous, undo_message)
        except PersistenceError as e:
            logger.warning("Undo journal not updated: %s", e)

    def _persist(self) -> bool:
        if self.store is None:
            return True
        try:
            self.store.save(self.state)
        except PersistenceError as e:
            logger.warning("Farm state not synced: %s", e)
            self.sync_error = e
            return False
        self.sync_error = None
        return True
