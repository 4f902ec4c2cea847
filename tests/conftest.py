"""Shared pytest fixtures for cashledger tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from cashledger.database.factories import create_sqlite_store
from cashledger.domain.access import AccessGate
from cashledger.domain.entities import PaymentMode, Transaction, TransactionKind
from cashledger.domain.ledger import LedgerService

TEST_PASSWORD = "s3cret-pass"
FAST_ITERATIONS = 1_000


@pytest.fixture
def temp_db():
    """Create a temporary record store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def gate(temp_db):
    """Access gate with no password set yet."""
    return AccessGate(temp_db, iterations=FAST_ITERATIONS)


@pytest.fixture
def authenticated_gate(gate):
    """Access gate with TEST_PASSWORD set and an open session."""
    gate.set_secret(TEST_PASSWORD)
    return gate


@pytest.fixture
def ledger(temp_db, authenticated_gate):
    """LedgerService with an open session on an empty store."""
    service = LedgerService(temp_db, authenticated_gate)
    service.open()
    return service


@pytest.fixture
def make_transaction():
    """Factory for transactions with sensible defaults."""

    def _make(**overrides):
        values = {
            "id": "t1",
            "date": date(2024, 1, 5),
            "time": "10:00",
            "amount": Decimal("500"),
            "kind": TransactionKind.CREDIT,
            "payment_mode": PaymentMode.CASH,
            "counterparty": "Alice",
            "remarks": "gift",
            "reference_id": None,
        }
        values.update(overrides)
        return Transaction(**values)

    return _make


@pytest.fixture
def cli_db(temp_db):
    """Temporary store with TEST_PASSWORD set, for CLI tests."""
    AccessGate(temp_db, iterations=FAST_ITERATIONS).set_secret(TEST_PASSWORD)
    return temp_db


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
