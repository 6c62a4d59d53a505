"""Abstract persistence interface."""

from abc import ABC, abstractmethod

# Import entities directly to avoid circular import through domain/__init__.py
from farmledger.domain.entities import FarmState


class FarmStore(ABC):
    """Durable home of a ``FarmState``.

    The ledger treats the whole state as the unit of persistence: it loads it
    once at startup and saves it after every successful mutation.

    ``pending_sync`` is set by a fallback wrapper when this store holds
    changes its primary store has not seen yet. Stores used as a local cache
    keep the flag together with the state.
    """

    pending_sync = False

    def connect(self) -> None:
        """Open any underlying connection."""

    def disconnect(self) -> None:
        """Release any underlying connection."""

    @abstractmethod
    def load(self) -> FarmState:
        """Load the stored state. Returns an empty state if nothing is stored.

        Raises:
            PersistenceError: If the store cannot be reached
        """
        pass

    @abstractmethod
    def save(self, state: FarmState) -> None:
        """Durably replace the stored state.

        Raises:
            PersistenceError: If the state could not be written
        """
        pass
