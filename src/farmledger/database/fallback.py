"""Hybrid store: primary database with a local cache fallback ("hybrid mode")."""

import logging

from farmledger.database.base import FarmStore
from farmledger.domain.entities import FarmState
from farmledger.domain.errors import PersistenceError

logger = logging.getLogger(__name__)


class FallbackFarmStore(FarmStore):
    """Writes through to ``primary`` and mirrors every state into ``cache``.

    When the primary store fails, the state still lands in the cache, marked
    as pending, and the failure is re-raised as a recoverable
    ``PersistenceError`` so the caller can offer a retry. A pending cache
    wins over the primary on load until a primary save succeeds. Loading
    also falls back to the cache when the primary is unreachable.
    """

    def __init__(self, primary: FarmStore, cache: FarmStore):
        self.primary = primary
        self.cache = cache
        self.degraded = False

    @property
    def pending_sync(self) -> bool:
        return self.cache.pending_sync

    def connect(self) -> None:
        try:
            self.primary.connect()
        except PersistenceError as e:
            logger.warning("Primary store unavailable, working from local cache: %s", e)
            self.degraded = True

    def disconnect(self) -> None:
        self.primary.disconnect()
        self.cache.disconnect()

    def load(self) -> FarmState:
        cached = self.cache.load()
        if self.cache.pending_sync:
            logger.warning("Local cache holds changes not yet synced; loading from it")
            self.degraded = True
            return cached

        try:
            state = self.primary.load()
        except PersistenceError as e:
            logger.warning("Loading from local cache after primary failure: %s", e)
            self.degraded = True
            return cached

        self.degraded = False
        self._mirror(state)
        return state

    def save(self, state: FarmState) -> None:
        try:
            self.primary.save(state)
        except PersistenceError as e:
            self.degraded = True
            self.cache.pending_sync = True
            try:
                self.cache.save(state)
            except PersistenceError as cache_error:
                raise PersistenceError(
                    f"{e}; local cache also failed: {cache_error}", recoverable=False
                ) from cache_error
            raise PersistenceError(f"{e} (changes kept in local cache)", recoverable=True) from e

        self.degraded = False
        self._mirror(state)

    def _mirror(self, state: FarmState) -> None:
        self.cache.pending_sync = False
        try:
            self.cache.save(state)
        except PersistenceError as e:
            logger.warning("Could not refresh local cache: %s", e)
