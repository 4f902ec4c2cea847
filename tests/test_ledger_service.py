"""Tests for the ledger service."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from cashledger.domain.access import AccessGate
from cashledger.domain.entities import (
    FilterCriteria,
    LedgerSummary,
    PaymentMode,
    TransactionKind,
)
from cashledger.domain.errors import AuthError, NotFoundError, StorageError, ValidationError
from cashledger.domain.ledger import LedgerService
from cashledger.domain.working_set import WorkingSetCache

from conftest import FAST_ITERATIONS


def _entry(**overrides):
    values = {
        "date": "2024-01-05",
        "time": "10:00",
        "amount": "500",
        "kind": "credit",
        "payment_mode": "cash",
        "counterparty": "Alice",
        "remarks": "gift",
    }
    values.update(overrides)
    return values


def test_added_transaction_is_visible_and_summarized(ledger):
    txn = ledger.add_transaction(**_entry())

    assert ledger.transactions(FilterCriteria(kind="credit")) == (txn,)
    assert ledger.summary() == LedgerSummary(
        credit=Decimal("500"), debit=Decimal("0"), balance=Decimal("500")
    )


def test_search_matches_counterparty(ledger):
    txn = ledger.add_transaction(**_entry())
    ledger.add_transaction(**_entry(counterparty="Bob", remarks="rent", kind="debit"))

    assert ledger.transactions(FilterCriteria(search_term="alice")) == (txn,)


def test_view_totals_follow_filter(ledger):
    ledger.add_transaction(**_entry())
    ledger.add_transaction(**_entry(amount="120.50", kind="debit", counterparty="Shop"))

    view = ledger.view(FilterCriteria(kind="debit"))

    assert len(view.transactions) == 1
    assert view.summary.debit == Decimal("120.50")
    assert view.summary.balance == Decimal("-120.50")


def test_newest_first(ledger):
    ledger.add_transaction(**_entry(date="2024-01-01", remarks="old"))
    ledger.add_transaction(**_entry(date="2024-03-01", remarks="new"))
    ledger.add_transaction(**_entry(date="2024-03-01", time="08:00", remarks="early"))

    assert [txn.remarks for txn in ledger.transactions()] == ["new", "early", "old"]


def test_online_manual_entry_needs_reference(ledger, temp_db):
    with pytest.raises(ValidationError, match="Reference ID is required"):
        ledger.add_transaction(**_entry(payment_mode="online"))
    assert temp_db.get_all() == []

    txn = ledger.add_transaction(**_entry(payment_mode="online", reference_id="UPI-1"))
    assert txn.reference_id == "UPI-1"


def test_online_import_without_reference_is_accepted(ledger):
    result = ledger.import_rows(
        [
            {
                "id": "imp-1",
                "date": "2024-02-01",
                "time": "12:00",
                "amount": "75",
                "kind": "debit",
                "paymentMode": "online",
                "counterparty": "Shop",
                "remarks": "groceries",
            }
        ]
    )

    assert result.imported == 1
    assert ledger.get_transaction("imp-1").reference_id is None
    assert ledger.transactions()[0].id == "imp-1"


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount": "0"},
        {"amount": "-5"},
        {"amount": "abc"},
        {"counterparty": "  "},
        {"remarks": ""},
        {"kind": "transfer"},
        {"date": "not a date"},
    ],
)
def test_invalid_entries_never_reach_store(ledger, temp_db, overrides):
    with pytest.raises(ValidationError):
        ledger.add_transaction(**_entry(**overrides))
    assert temp_db.get_all() == []
    assert ledger.transactions() == ()


def test_edit_replaces_record(ledger):
    txn = ledger.add_transaction(**_entry())

    edited = ledger.edit_transaction(txn.id, amount="650", remarks="bonus")

    assert edited.id == txn.id
    assert edited.counterparty == "Alice"
    assert ledger.transactions() == (edited,)
    assert ledger.summary().credit == Decimal("650")


def test_edit_unknown_transaction(ledger):
    with pytest.raises(NotFoundError):
        ledger.edit_transaction("missing", remarks="x")


def test_edit_revalidates(ledger):
    txn = ledger.add_transaction(**_entry())
    with pytest.raises(ValidationError):
        ledger.edit_transaction(txn.id, payment_mode="online")
    assert ledger.get_transaction(txn.id) == txn


def test_delete_removes_from_view(ledger, temp_db):
    first = ledger.add_transaction(**_entry())
    second = ledger.add_transaction(**_entry(counterparty="Bob"))

    ledger.delete_transaction(first.id)

    assert ledger.transactions() == (second,)
    assert ledger.counterparties() == ("Bob",)
    assert temp_db.get(first.id) is None


def test_delete_unknown_is_not_an_error(ledger):
    ledger.delete_transaction("missing")
    assert ledger.transactions() == ()


def test_counterparties_distinct_and_sorted(ledger):
    ledger.add_transaction(**_entry(counterparty="bob"))
    ledger.add_transaction(**_entry(counterparty="Alice"))
    ledger.add_transaction(**_entry(counterparty="Alice"))

    assert ledger.counterparties() == ("Alice", "bob")


def test_export_and_report_use_filter(ledger):
    ledger.add_transaction(**_entry())
    ledger.add_transaction(**_entry(kind="debit", counterparty="Shop"))

    text = ledger.export_csv(FilterCriteria(kind="debit"))
    rows = ledger.report_rows(FilterCriteria(kind="debit"))

    assert len(text.splitlines()) == 2
    assert '"Shop"' in text
    assert [row[5] for row in rows] == ["Shop"]


def test_requires_authentication(temp_db):
    service = LedgerService(temp_db, AccessGate(temp_db, iterations=FAST_ITERATIONS))

    with pytest.raises(AuthError):
        service.open()
    with pytest.raises(AuthError):
        service.add_transaction(**_entry())
    with pytest.raises(AuthError):
        service.transactions()


def test_logout_locks_service(ledger):
    ledger.gate.logout()
    with pytest.raises(AuthError):
        ledger.summary()


def test_storage_failure_invalidates_cache(authenticated_gate, make_transaction):
    store = MagicMock()
    store.get_all.return_value = [make_transaction()]
    cache = WorkingSetCache(store)
    service = LedgerService(store, authenticated_gate, cache)
    service.open()
    assert cache.is_loaded

    store.put.side_effect = StorageError("disk full")
    with pytest.raises(StorageError):
        service.add_transaction(**_entry())

    assert not cache.is_loaded


def test_reload_failure_surfaces_storage_error(authenticated_gate):
    store = MagicMock()
    store.get_all.side_effect = StorageError("unreadable")
    service = LedgerService(store, authenticated_gate)

    with pytest.raises(StorageError):
        service.open()
    assert not service.cache.is_loaded


def test_import_file(ledger, tmp_path):
    path = tmp_path / "in.csv"
    path.write_text(
        "id,date,time,paymentMode,kind,amount,counterparty,remarks,referenceId\n"
        '"a","2024-01-02","09:00","cash","credit","10","Ann","x",""\n'
        '"b","2024-01-03","09:00","cash","credit","oops","Ann","x",""\n',
        encoding="utf-8",
    )

    result = ledger.import_csv_file(str(path))

    assert result.imported == 1
    assert [skip.row_num for skip in result.skipped] == [3]
    assert [txn.id for txn in ledger.transactions()] == ["a"]


def test_import_overwrites_existing_id(ledger):
    txn = ledger.add_transaction(**_entry())
    ledger.import_rows(
        [
            {
                "id": txn.id,
                "date": "2024-01-05",
                "time": "10:00",
                "amount": "999",
                "kind": "credit",
                "paymentMode": "cash",
                "counterparty": "Alice",
                "remarks": "corrected",
            }
        ]
    )

    assert len(ledger.transactions()) == 1
    assert ledger.get_transaction(txn.id).amount == Decimal("999")
    assert ledger.get_transaction(txn.id).date == date(2024, 1, 5)
    assert ledger.get_transaction(txn.id).kind is TransactionKind.CREDIT
    assert ledger.get_transaction(txn.id).payment_mode is PaymentMode.CASH
