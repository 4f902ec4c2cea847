"""In-memory working set kept in sync with the record store."""

import logging
from typing import Iterable, Optional

from cashledger.database.base import RecordStore
from cashledger.domain.entities import Transaction, WorkingSet
from cashledger.domain.errors import StorageError

logger = logging.getLogger(__name__)


def sort_transactions(transactions: Iterable[Transaction]) -> tuple[Transaction, ...]:
    """Order transactions newest first.

    Date descending, then time descending. Ties on both keep the order in
    which the store returned them (the sort is stable).
    """
    return tuple(sorted(transactions, key=lambda txn: (txn.date, txn.time), reverse=True))


def collect_counterparties(transactions: Iterable[Transaction]) -> tuple[str, ...]:
    """Distinct counterparty names, sorted case-insensitively."""
    names = {txn.counterparty for txn in transactions}
    return tuple(sorted(names, key=lambda name: (name.casefold(), name)))


def build_working_set(transactions: Iterable[Transaction]) -> WorkingSet:
    """Build a canonical snapshot from an unordered batch of transactions."""
    ordered = sort_transactions(transactions)
    return WorkingSet(transactions=ordered, counterparties=collect_counterparties(ordered))


class WorkingSetCache:
    """Owns the current working set snapshot for one record store.

    The snapshot is always replaced wholesale: ``reload`` re-reads every
    transaction, ``discard`` drops one id after the store confirmed its
    deletion.
    """

    def __init__(self, store: RecordStore):
        self.store = store
        self._snapshot: Optional[WorkingSet] = None

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> WorkingSet:
        """Current snapshot, reloading first if none is held."""
        if self._snapshot is None:
            return self.reload()
        return self._snapshot

    def reload(self) -> WorkingSet:
        """Re-read the store and replace the snapshot.

        Raises:
            StorageError: If the store cannot be read; the cache is left
                invalidated
        """
        try:
            transactions = self.store.get_all()
        except StorageError:
            self.invalidate()
            raise
        self._snapshot = build_working_set(transactions)
        logger.info("Working set reloaded with %d transaction(s)", len(self._snapshot.transactions))
        return self._snapshot

    def discard(self, transaction_id: str) -> WorkingSet:
        """Remove one transaction from the snapshot without a reload."""
        remaining = [txn for txn in self.snapshot.transactions if txn.id != transaction_id]
        self._snapshot = WorkingSet(
            transactions=tuple(remaining),
            counterparties=collect_counterparties(remaining),
        )
        return self._snapshot

    def invalidate(self) -> None:
        """Forget the snapshot; the next access reloads from the store."""
        self._snapshot = None
