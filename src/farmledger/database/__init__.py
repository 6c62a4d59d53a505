"""Persistence layer for farmledger."""

from farmledger.database.base import FarmStore
from farmledger.database.factories import (
    create_sqlite_store,
    create_local_store,
    create_store,
    create_undo_journal,
)
from farmledger.database.undo_journal import UndoJournal

__all__ = [
    "FarmStore",
    "UndoJournal",
    "create_sqlite_store",
    "create_local_store",
    "create_store",
    "create_undo_journal",
]
