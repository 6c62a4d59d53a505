"""Shared pytest fixtures for farmledger tests."""

import itertools
import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from farmledger.database.factories import create_sqlite_store
from farmledger.database.memory import InMemoryFarmStore
from farmledger.domain.entities import Category
from farmledger.domain.flock import FlockService
from farmledger.domain.inventory import InventoryService
from farmledger.domain.ledger import FarmLedger
from farmledger.domain.transaction import TransactionService


@pytest.fixture
def temp_store():
    """Create a temporary SQLite store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()

    yield store

    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_store():
    """Create an in-memory store."""
    return InMemoryFarmStore()


@pytest.fixture
def ledger(memory_store):
    """Create a ledger with predictable ids backed by the in-memory store."""
    counter = itertools.count(1)
    return FarmLedger(memory_store, id_factory=lambda: f"id-{next(counter)}")


@pytest.fixture
def transaction_service(ledger):
    """Create a TransactionService on the shared ledger."""
    return TransactionService(ledger)


@pytest.fixture
def flock_service(ledger):
    """Create a FlockService on the shared ledger."""
    return FlockService(ledger)


@pytest.fixture
def inventory_service(ledger):
    """Create an InventoryService on the shared ledger."""
    return InventoryService(ledger)


@pytest.fixture
def sample_flock(flock_service):
    """Create a flock of 500 birds."""
    return flock_service.create_flock(
        batch_name="Batch A",
        breed="Cobb500",
        initial_count=500,
        start_date=date(2024, 1, 1),
    )


@pytest.fixture
def feed_item(inventory_service):
    """Create a feed stock line of 10 bags."""
    return inventory_service.add_item(
        name="Starter",
        category=Category.FEED,
        current_quantity=Decimal("10"),
        unit="bag",
        min_threshold=Decimal("3"),
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


class FakeInsightsClient:
    """Insights client returning a canned reply or raising."""

    def __init__(self, reply: str | None = None, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_insights_client():
    """Factory for fake insights clients."""
    return FakeInsightsClient
