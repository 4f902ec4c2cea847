"""Ledger service: the access-gated mutate, reload and view pipeline."""

import logging
from typing import Any, Iterable, Mapping, Optional

from cashledger.database.base import RecordStore
from cashledger.domain.access import AccessGate
from cashledger.domain.csv_export import build_report_rows, export_csv
from cashledger.domain.csv_import import ImportReconciler
from cashledger.domain.entities import (
    FilterCriteria,
    ImportResult,
    LedgerSummary,
    LedgerView,
    Transaction,
    WorkingSet,
)
from cashledger.domain.errors import NotFoundError, StorageError, transaction_not_found
from cashledger.domain.filtering import filter_transactions
from cashledger.domain.summary import summarize
from cashledger.domain.transaction import build_transaction, replace_transaction
from cashledger.domain.working_set import WorkingSetCache

logger = logging.getLogger(__name__)


class LedgerService:
    """Service for recording, viewing, importing and exporting transactions.

    Every operation requires an authenticated access gate. Mutations go to
    the record store first; the working set is then reloaded (or, for a
    delete, trimmed) so derived views always come from current data.
    """

    def __init__(self, store: RecordStore, gate: AccessGate, cache: Optional[WorkingSetCache] = None):
        """Initialize ledger service.

        Args:
            store: Record store instance
            gate: Access gate that must be authenticated before use
            cache: Working set cache; one is created for ``store`` if omitted
        """
        self.store = store
        self.gate = gate
        self.cache = cache or WorkingSetCache(store)
        self.reconciler = ImportReconciler(store, self.cache)

    def open(self) -> WorkingSet:
        """Load the working set after authentication."""
        self.gate.require_authenticated()
        return self.cache.reload()

    def _put(self, transaction: Transaction) -> None:
        try:
            self.store.put(transaction)
        except StorageError:
            self.cache.invalidate()
            raise
        self.cache.reload()

    def add_transaction(self, **fields: Any) -> Transaction:
        """Validate and store a manually entered transaction.

        Args:
            **fields: Keyword arguments accepted by ``build_transaction``

        Returns:
            The stored transaction (with its generated id)

        Raises:
            ValidationError: If the entry is invalid; nothing is stored
            StorageError: If the store rejects the write
        """
        self.gate.require_authenticated()
        transaction = build_transaction(**fields)
        self._put(transaction)
        logger.info("Added %s transaction %s", transaction.kind.value, transaction.id)
        return transaction

    def edit_transaction(self, transaction_id: str, **changes: Any) -> Transaction:
        """Replace a stored transaction with an edited, re-validated copy.

        Raises:
            NotFoundError: If no transaction has this id
            ValidationError: If the edited record is invalid
        """
        self.gate.require_authenticated()
        existing = self.store.get(transaction_id)
        if existing is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        transaction = replace_transaction(existing, **changes)
        self._put(transaction)
        logger.info("Replaced transaction %s", transaction.id)
        return transaction

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        self.gate.require_authenticated()
        return self.store.get(transaction_id)

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete by id. Unknown ids are not an error."""
        self.gate.require_authenticated()
        try:
            self.store.delete(transaction_id)
        except StorageError:
            self.cache.invalidate()
            raise
        self.cache.discard(transaction_id)
        logger.info("Deleted transaction %s", transaction_id)

    def transactions(self, criteria: Optional[FilterCriteria] = None) -> tuple[Transaction, ...]:
        """Working set filtered by ``criteria`` in canonical order."""
        self.gate.require_authenticated()
        return filter_transactions(self.cache.snapshot.transactions, criteria or FilterCriteria())

    def view(self, criteria: Optional[FilterCriteria] = None) -> LedgerView:
        """Filtered transactions with their totals."""
        transactions = self.transactions(criteria)
        return LedgerView(transactions=transactions, summary=summarize(transactions))

    def summary(self, criteria: Optional[FilterCriteria] = None) -> LedgerSummary:
        return summarize(self.transactions(criteria))

    def counterparties(self) -> tuple[str, ...]:
        """Distinct counterparties for autocomplete."""
        self.gate.require_authenticated()
        return self.cache.snapshot.counterparties

    def export_csv(self, criteria: Optional[FilterCriteria] = None) -> str:
        return export_csv(self.transactions(criteria))

    def report_rows(self, criteria: Optional[FilterCriteria] = None) -> list[tuple[str, ...]]:
        return build_report_rows(self.transactions(criteria))

    def import_rows(self, rows: Iterable[Mapping[str, Any]]) -> ImportResult:
        self.gate.require_authenticated()
        return self.reconciler.reconcile(rows)

    def import_csv_text(self, text: str) -> ImportResult:
        self.gate.require_authenticated()
        return self.reconciler.import_csv_text(text)

    def import_csv_file(self, csv_file_path: str) -> ImportResult:
        self.gate.require_authenticated()
        return self.reconciler.import_csv_file(csv_file_path)
