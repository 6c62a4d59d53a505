"""Store factory functions for creating persistence backends."""

import os
from pathlib import Path
from typing import Optional

from farmledger.database.base import FarmStore
from farmledger.database.fallback import FallbackFarmStore
from farmledger.database.local_store import LocalFarmStore
from farmledger.database.memory import InMemoryFarmStore
from farmledger.database.sqlalchemy_db import SQLAlchemyFarmStore
from farmledger.database.undo_journal import UndoJournal

STORAGE_MODES = ("remote", "local", "hybrid", "memory")


def _data_dir() -> Path:
    data_dir = Path.home() / ".farmledger"
    data_dir.mkdir(exist_ok=True)
    return data_dir


def _database_path(database_path: Optional[str]) -> str:
    if database_path is None:
        database_path = os.environ.get("FARMLEDGER_DB_PATH")
    if database_path is None:
        database_path = str(_data_dir() / "farmledger.db")
    return database_path


def _cache_path(cache_path: Optional[str]) -> str:
    if cache_path is None:
        cache_path = os.environ.get("FARMLEDGER_CACHE_PATH")
    if cache_path is None:
        cache_path = str(_data_dir() / "farm_state.json")
    return cache_path


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyFarmStore:
    """Create a SQLite-backed store.

    Args:
        database_path: Path to SQLite database file. If None, checks FARMLEDGER_DB_PATH
            environment variable, then defaults to ~/.farmledger/farmledger.db

    Returns:
        SQLAlchemyFarmStore instance configured for SQLite
    """
    return SQLAlchemyFarmStore(f"sqlite:///{_database_path(database_path)}")


def create_local_store(cache_path: Optional[str] = None) -> LocalFarmStore:
    """Create a JSON file store.

    Args:
        cache_path: Path to the JSON file. If None, checks FARMLEDGER_CACHE_PATH
            environment variable, then defaults to ~/.farmledger/farm_state.json
    """
    return LocalFarmStore(_cache_path(cache_path))


def create_store(
    mode: Optional[str] = None,
    database_path: Optional[str] = None,
    cache_path: Optional[str] = None,
) -> FarmStore:
    """Create the store for a storage mode.

    Args:
        mode: "remote" (database only), "local" (JSON file only), "hybrid"
            (database with JSON fallback) or "memory". If None, checks
            FARMLEDGER_MODE, then defaults to "hybrid".
        database_path: SQLite path for remote and hybrid modes
        cache_path: JSON path for local and hybrid modes

    Raises:
        ValueError: If mode is not recognized
    """
    if mode is None:
        mode = os.environ.get("FARMLEDGER_MODE", "hybrid")
    mode = mode.strip().lower()

    if mode == "remote":
        return create_sqlite_store(database_path)
    if mode == "local":
        return create_local_store(cache_path)
    if mode == "hybrid":
        return FallbackFarmStore(create_sqlite_store(database_path), create_local_store(cache_path))
    if mode == "memory":
        return InMemoryFarmStore()

    raise ValueError(f"Unknown storage mode: '{mode}'. Supported modes: {', '.join(STORAGE_MODES)}")


def create_undo_journal(
    mode: Optional[str] = None,
    database_path: Optional[str] = None,
    cache_path: Optional[str] = None,
) -> Optional[UndoJournal]:
    """Create the undo journal that sits next to a mode's data file.

    The journal for ``farm.json`` is ``farm.undo.json``; remote mode keys it
    off the database file instead. Memory mode has no journal.
    """
    if mode is None:
        mode = os.environ.get("FARMLEDGER_MODE", "hybrid")
    mode = mode.strip().lower()

    if mode == "memory":
        return None
    if mode == "remote":
        data_file = Path(_database_path(database_path))
    else:
        data_file = Path(_cache_path(cache_path))
    return UndoJournal(data_file.with_suffix(".undo.json"))
