"""Tests for the working set cache."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from cashledger.domain.entities import WorkingSet
from cashledger.domain.errors import StorageError
from cashledger.domain.working_set import (
    WorkingSetCache,
    build_working_set,
    collect_counterparties,
    sort_transactions,
)


def test_sort_date_descending(make_transaction):
    older = make_transaction(id="old", date=date(2024, 1, 1))
    newer = make_transaction(id="new", date=date(2024, 3, 1))
    middle = make_transaction(id="mid", date=date(2024, 2, 1))

    assert [txn.id for txn in sort_transactions([older, newer, middle])] == ["new", "mid", "old"]


def test_sort_same_date_uses_time_descending(make_transaction):
    morning = make_transaction(id="am", time="09:00")
    evening = make_transaction(id="pm", time="18:30")

    assert [txn.id for txn in sort_transactions([morning, evening])] == ["pm", "am"]


def test_sort_full_tie_keeps_store_order(make_transaction):
    first = make_transaction(id="b")
    second = make_transaction(id="a")
    third = make_transaction(id="c")

    assert [txn.id for txn in sort_transactions([first, second, third])] == ["b", "a", "c"]


def test_collect_counterparties_unique(make_transaction):
    transactions = [
        make_transaction(id="1", counterparty="bob"),
        make_transaction(id="2", counterparty="Alice"),
        make_transaction(id="3", counterparty="bob"),
    ]

    assert collect_counterparties(transactions) == ("Alice", "bob")


def test_build_working_set_is_immutable(make_transaction):
    working_set = build_working_set([make_transaction()])

    assert isinstance(working_set.transactions, tuple)
    with pytest.raises(AttributeError):
        working_set.transactions = ()


def test_reload_reflects_store_exactly(temp_db, make_transaction):
    cache = WorkingSetCache(temp_db)
    temp_db.put(make_transaction(id="a", date=date(2024, 1, 1)))
    temp_db.put(make_transaction(id="b", date=date(2024, 1, 2), counterparty="Bob"))

    snapshot = cache.reload()

    assert [txn.id for txn in snapshot.transactions] == ["b", "a"]
    assert snapshot.counterparties == ("Alice", "Bob")

    temp_db.delete("a")
    temp_db.put(make_transaction(id="c", date=date(2023, 12, 31)))
    snapshot = cache.reload()

    assert [txn.id for txn in snapshot.transactions] == ["b", "c"]


def test_reload_returns_fresh_snapshot(temp_db, make_transaction):
    cache = WorkingSetCache(temp_db)
    before = cache.reload()
    temp_db.put(make_transaction())
    after = cache.reload()

    assert before.transactions == ()
    assert len(after.transactions) == 1
    assert cache.snapshot is after


def test_snapshot_loads_lazily(temp_db, make_transaction):
    temp_db.put(make_transaction())
    cache = WorkingSetCache(temp_db)

    assert not cache.is_loaded
    assert len(cache.snapshot.transactions) == 1
    assert cache.is_loaded


def test_discard_removes_without_reload(make_transaction):
    store = MagicMock()
    store.get_all.return_value = [
        make_transaction(id="a", counterparty="Alice"),
        make_transaction(id="b", counterparty="Bob"),
    ]
    cache = WorkingSetCache(store)
    cache.reload()

    snapshot = cache.discard("a")

    assert [txn.id for txn in snapshot.transactions] == ["b"]
    assert snapshot.counterparties == ("Bob",)
    assert store.get_all.call_count == 1


def test_reload_failure_invalidates(make_transaction):
    store = MagicMock()
    store.get_all.return_value = [make_transaction()]
    cache = WorkingSetCache(store)
    cache.reload()

    store.get_all.side_effect = StorageError("disk gone")
    with pytest.raises(StorageError):
        cache.reload()

    assert not cache.is_loaded


def test_invalidate_forces_reload(make_transaction):
    store = MagicMock()
    store.get_all.return_value = []
    cache = WorkingSetCache(store)
    assert cache.snapshot == WorkingSet()

    store.get_all.return_value = [make_transaction()]
    cache.invalidate()

    assert len(cache.snapshot.transactions) == 1
