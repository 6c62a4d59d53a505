"""In-memory store used when nothing should touch disk."""

from farmledger.database.base import FarmStore
from farmledger.domain.entities import FarmState
from farmledger.domain.errors import PersistenceError


class InMemoryFarmStore(FarmStore):
    """Keeps the last saved state in memory.

    ``fail_saves`` makes every save raise, which lets callers exercise the
    sync-failure path without a broken database.
    """

    def __init__(self, state: FarmState | None = None, fail_saves: bool = False):
        self.state = state if state is not None else FarmState()
        self.fail_saves = fail_saves
        self.save_count = 0

    def load(self) -> FarmState:
        return self.state

    def save(self, state: FarmState) -> None:
        if self.fail_saves:
            raise PersistenceError("In-memory store is configured to fail saves")
        self.state = state
        self.save_count += 1
