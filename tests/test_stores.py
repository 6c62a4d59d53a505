"""Tests for persistence stores and ledger sync behaviour."""

from datetime import date
from decimal import Decimal

import pytest

from farmledger.database.factories import STORAGE_MODES, create_store, create_undo_journal
from farmledger.database.fallback import FallbackFarmStore
from farmledger.database.local_store import LocalFarmStore
from farmledger.database.memory import InMemoryFarmStore
from farmledger.database.undo_journal import UndoJournal
from farmledger.domain.entities import Category, FarmState, TransactionType
from farmledger.domain.errors import PersistenceError
from farmledger.domain.flock import FlockService
from farmledger.domain.inventory import InventoryService
from farmledger.domain.ledger import FarmLedger
from farmledger.domain.transaction import TransactionService


def _populate(ledger):
    flocks = FlockService(ledger)
    inventory = InventoryService(ledger)
    transactions = TransactionService(ledger)

    inventory.add_item("Starter", Category.FEED, Decimal("10"), "bag", Decimal("3"))
    flock = flocks.create_flock("Batch A", "Cobb500", 500, date(2024, 1, 1))
    flocks.record_mortality(flock.id, date(2024, 1, 2), 3, "weak")
    flocks.record_mortality(flock.id, date(2024, 1, 3), 2)
    flocks.record_weight(flock.id, date(2024, 1, 7), Decimal("180"), 10)
    flocks.record_feed(flock.id, date(2024, 1, 4), Decimal("1"), "bag")
    transactions.add_transaction(
        date=date(2024, 1, 1),
        type=TransactionType.EXPENSE,
        category=Category.CHICKEN_PURCHASE,
        amount=Decimal("25000"),
        flock_id=flock.id,
    )
    transactions.add_transaction(
        date=date(2024, 1, 5), type=TransactionType.INCOME, category=Category.SALES, amount=Decimal("900.50")
    )
    return flock


def test_sqlite_round_trip(temp_store):
    """Test that the SQLite store preserves order and logs."""
    ledger = FarmLedger(temp_store)
    flock = _populate(ledger)

    loaded = FarmLedger(temp_store).load()

    assert loaded == ledger.state
    loaded_flock = loaded.flocks[0]
    assert loaded_flock.id == flock.id
    assert [log.count for log in loaded_flock.mortality_logs] == [3, 2]
    assert loaded.inventory[0].current_quantity == Decimal("9")
    assert [t.amount for t in loaded.transactions] == [Decimal("900.50"), Decimal("25000")]


def test_sqlite_delete_cascades(temp_store):
    """Test that deleting a flock removes its logs from the database."""
    ledger = FarmLedger(temp_store)
    flock = _populate(ledger)

    FlockService(ledger).delete_flock(flock.id)
    loaded = FarmLedger(temp_store).load()

    assert loaded.flocks == ()
    assert len(loaded.transactions) == 2


def test_local_store_round_trip(tmp_path):
    """Test that the JSON store preserves the state."""
    store = LocalFarmStore(tmp_path / "farm.json")
    ledger = FarmLedger(store)
    _populate(ledger)

    assert store.load() == ledger.state


def test_local_store_missing_file(tmp_path):
    """Test that a missing file loads as an empty farm."""
    assert LocalFarmStore(tmp_path / "absent.json").load() == FarmState()


def test_local_store_corrupt_file(tmp_path, caplog):
    """Test that a corrupt file loads as an empty farm and is logged."""
    path = tmp_path / "farm.json"
    path.write_text("{not valid json", encoding="utf-8")

    assert LocalFarmStore(path).load() == FarmState()
    assert "unreadable" in caplog.text


def test_fallback_store_uses_cache_when_primary_fails():
    """Test that a failing primary keeps changes in the cache and reports recoverable."""
    primary = InMemoryFarmStore(fail_saves=True)
    cache = InMemoryFarmStore()
    store = FallbackFarmStore(primary, cache)
    ledger = FarmLedger(store)

    _populate(ledger)

    assert store.degraded
    assert cache.state == ledger.state
    assert isinstance(ledger.sync_error, PersistenceError)
    assert ledger.sync_error.recoverable


def test_fallback_store_mirrors_successful_saves():
    """Test that the cache tracks the primary when both work."""
    primary = InMemoryFarmStore()
    cache = InMemoryFarmStore()
    ledger = FarmLedger(FallbackFarmStore(primary, cache))

    _populate(ledger)

    assert primary.state == cache.state == ledger.state
    assert ledger.sync_error is None


def test_failed_save_keeps_state_and_retry_clears_error():
    """Test that a failed save never rolls back and a retry can recover."""
    store = InMemoryFarmStore(fail_saves=True)
    ledger = FarmLedger(store)
    flock = _populate(ledger)

    assert ledger.sync_error is not None
    assert ledger.state.flocks[0].id == flock.id
    assert ledger.retry_sync() is False

    store.fail_saves = False
    assert ledger.retry_sync() is True
    assert ledger.sync_error is None
    assert store.state == ledger.state


def test_undo_only_after_delete(ledger, flock_service, sample_flock):
    """Test that undo is available after a delete and cleared by other changes."""
    assert not ledger.can_undo

    flock_service.delete_flock(sample_flock.id)
    assert ledger.can_undo

    flock_service.create_flock("Batch B", "", 10, date(2024, 1, 1))
    assert not ledger.can_undo
    assert ledger.undo() is False


def test_create_store_modes(tmp_path):
    """Test the storage mode factory."""
    db_path = str(tmp_path / "farm.db")
    cache_path = str(tmp_path / "farm.json")

    assert isinstance(create_store("memory"), InMemoryFarmStore)
    assert isinstance(create_store("local", cache_path=cache_path), LocalFarmStore)
    assert isinstance(create_store("hybrid", db_path, cache_path), FallbackFarmStore)
    assert "remote" in STORAGE_MODES

    with pytest.raises(ValueError):
        create_store("cloud")


def test_sqlite_keeps_small_stock_changes(temp_store):
    """Test that sub-gram draw-downs against bag stock survive a database reload."""
    ledger = FarmLedger(temp_store)
    flocks = FlockService(ledger)
    item = InventoryService(ledger).add_item("Starter", Category.FEED, Decimal("10"), "bag", Decimal("3"))
    flock = flocks.create_flock("Batch A", "", 100, date(2024, 1, 1))

    flocks.record_feed(flock.id, date(2024, 1, 2), Decimal("0.01"), "kg")

    assert ledger.state.inventory[0].current_quantity == Decimal("9.9998")
    reloaded = FarmLedger(temp_store).load()
    assert reloaded.inventory[0].id == item.id
    assert reloaded.inventory[0].current_quantity == Decimal("9.9998")
    assert reloaded.flocks[0].feed_logs[0].amount == Decimal("0.01")


def test_pending_cache_survives_restart(tmp_path):
    """Test that changes saved only to the cache win over a stale database after restart."""
    primary = InMemoryFarmStore(fail_saves=True)
    cache_path = tmp_path / "farm.json"

    first = FarmLedger(FallbackFarmStore(primary, LocalFarmStore(cache_path)))
    first.load()
    flock = FlockService(first).create_flock("Batch A", "", 100, date(2024, 1, 1))
    assert first.sync_error is not None

    # Database is back for the next run
    primary.fail_saves = False
    store = FallbackFarmStore(primary, LocalFarmStore(cache_path))
    second = FarmLedger(store)
    state = second.load()

    assert [f.id for f in state.flocks] == [flock.id]
    assert store.degraded
    assert second.sync_error is not None
    assert LocalFarmStore(cache_path).load().flocks[0].id == flock.id

    assert second.retry_sync() is True
    assert primary.state.flocks[0].id == flock.id
    assert not store.pending_sync

    third = FarmLedger(FallbackFarmStore(primary, LocalFarmStore(cache_path)))
    assert third.load().flocks[0].id == flock.id
    assert third.sync_error is None


def test_pending_cache_pushed_by_next_change(tmp_path):
    """Test that a later successful save carries the cached changes to the database."""
    primary = InMemoryFarmStore(fail_saves=True)
    cache = InMemoryFarmStore()
    first = FarmLedger(FallbackFarmStore(primary, cache))
    FlockService(first).create_flock("Batch A", "", 100, date(2024, 1, 1))

    primary.fail_saves = False
    second = FarmLedger(FallbackFarmStore(primary, cache))
    second.load()
    FlockService(second).create_flock("Batch B", "", 50, date(2024, 1, 2))

    assert [f.batch_name for f in primary.state.flocks] == ["Batch B", "Batch A"]
    assert not cache.pending_sync


def test_undo_journal_across_ledgers(tmp_path):
    """Test that a delete can be undone by a later ledger instance."""
    store = LocalFarmStore(tmp_path / "farm.json")
    journal = UndoJournal(tmp_path / "farm.undo.json")
    first = FarmLedger(store, undo_journal=journal)
    first.load()
    flock = FlockService(first).create_flock("Batch A", "", 100, date(2024, 1, 1))
    FlockService(first).delete_flock(flock.id)

    second = FarmLedger(store, undo_journal=journal)
    second.load()

    assert second.state.flocks == ()
    assert second.can_undo
    assert second.undo_message == "Deleted flock Batch A"
    assert second.undo() is True
    assert second.state.flocks[0].id == flock.id
    assert not journal.path.exists()

    third = FarmLedger(store, undo_journal=journal)
    assert third.load().flocks[0].id == flock.id
    assert not third.can_undo


def test_undo_journal_cleared_by_other_changes(tmp_path):
    """Test that any non-delete change makes the last delete final."""
    journal = UndoJournal(tmp_path / "farm.undo.json")
    ledger = FarmLedger(InMemoryFarmStore(), undo_journal=journal)
    flocks = FlockService(ledger)
    flock = flocks.create_flock("Batch A", "", 100, date(2024, 1, 1))
    flocks.delete_flock(flock.id)
    assert journal.load() is not None

    flocks.create_flock("Batch B", "", 10, date(2024, 1, 2))

    assert journal.load() is None


def test_corrupt_undo_journal_ignored(tmp_path, caplog):
    """Test that an unreadable journal means nothing to undo."""
    path = tmp_path / "farm.undo.json"
    path.write_text("{broken", encoding="utf-8")

    assert UndoJournal(path).load() is None
    assert "undo journal" in caplog.text


def test_create_undo_journal_paths(tmp_path):
    """Test that the journal sits next to the mode's data file."""
    db_path = str(tmp_path / "farm.db")
    cache_path = str(tmp_path / "cache.json")

    assert create_undo_journal("memory") is None
    assert create_undo_journal("remote", db_path, cache_path).path == tmp_path / "farm.undo.json"
    assert create_undo_journal("hybrid", db_path, cache_path).path == tmp_path / "cache.undo.json"
    assert create_undo_journal("local", db_path, cache_path).path == tmp_path / "cache.undo.json"
