"""Bulk CSV import reconciler."""

import csv
import io
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Optional

from cashledger.database.base import RecordStore
from cashledger.domain.entities import ImportResult, SkippedRow, Transaction
from cashledger.domain.errors import StorageError
from cashledger.domain.transaction import parse_kind, parse_payment_mode
from cashledger.domain.working_set import WorkingSetCache
from cashledger.utils.amount_parser import parse_amount
from cashledger.utils.date_parser import parse_iso_date, parse_time

logger = logging.getLogger(__name__)

REQUIRED_IMPORT_FIELDS = (
    "id",
    "date",
    "time",
    "kind",
    "paymentMode",
    "amount",
    "counterparty",
    "remarks",
)

# Column names written by older exports
HEADER_ALIASES = {
    "uuid": "id",
    "type": "kind",
    "refId": "referenceId",
}

SNIFF_DELIMITERS = ",;\t"


def normalize_row(row: Mapping[Any, Any]) -> dict[str, str]:
    """Map a loosely-typed row onto canonical column names.

    Keys and values are stripped, empty values dropped, unknown columns
    kept but never read. Canonical names win over their aliases.
    """
    normalized: dict[str, str] = {}
    aliased: dict[str, str] = {}
    for key, value in row.items():
        if key is None or value is None or isinstance(value, (list, tuple)):
            continue
        name = str(key).strip()
        text = str(value).strip()
        if not text:
            continue
        if name in HEADER_ALIASES:
            aliased[HEADER_ALIASES[name]] = text
        else:
            normalized[name] = text
    return {**aliased, **normalized}


def row_to_transaction(row: Mapping[Any, Any]) -> Transaction:
    """Convert one import row to a transaction.

    The reference ID is optional here even for online payments.

    Raises:
        ValueError: With the skip reason when the row is unusable
    """
    values = normalize_row(row)

    missing = [name for name in REQUIRED_IMPORT_FIELDS if name not in values]
    if missing:
        raise ValueError(f"Missing {', '.join(missing)}")

    kind = parse_kind(values["kind"])
    payment_mode = parse_payment_mode(values["paymentMode"])

    try:
        amount = parse_amount(values["amount"])
    except ValueError:
        raise ValueError(f"Amount '{values['amount']}' is not a number") from None
    if amount <= 0:
        raise ValueError(f"Amount '{values['amount']}' must be greater than zero")

    return Transaction(
        id=values["id"],
        date=parse_iso_date(values["date"]),
        time=parse_time(values["time"]),
        amount=amount,
        kind=kind,
        payment_mode=payment_mode,
        counterparty=values["counterparty"],
        remarks=values["remarks"],
        reference_id=values.get("referenceId"),
    )


def iter_csv_rows(text: str) -> Iterator[tuple[int, dict[Optional[str], Any]]]:
    """Tokenize header-keyed CSV text into ``(line_number, row)`` pairs.

    The header is line 1. Blank lines are skipped.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    try:
        delimiter = csv.Sniffer().sniff(text[:4096], delimiters=SNIFF_DELIMITERS).delimiter
    except csv.Error:
        delimiter = ","

    reader = csv.DictReader(io.StringIO(text), delimiter=delimiter)
    for row in reader:
        yield reader.line_num, row


class ImportReconciler:
    """Validates external rows and upserts them into the record store."""

    def __init__(self, store: RecordStore, cache: WorkingSetCache):
        """Initialize import reconciler.

        Args:
            store: Record store receiving the rows
            cache: Working set reloaded once per batch
        """
        self.store = store
        self.cache = cache

    def reconcile(self, rows: Iterable[Mapping[Any, Any]], start: int = 1) -> ImportResult:
        """Upsert every valid row, skip the rest, then reload once.

        Args:
            rows: Header-keyed rows
            start: Number reported for the first row

        Returns:
            ImportResult with the count of written rows and skip reasons

        Raises:
            StorageError: If a write fails; the batch stops and the working
                set is invalidated
        """
        return self._reconcile(enumerate(rows, start=start))

    def import_csv_text(self, text: str) -> ImportResult:
        """Import CSV text whose first line is the header."""
        return self._reconcile(iter_csv_rows(text))

    def import_csv_file(self, csv_file_path: str) -> ImportResult:
        """Import a CSV file.

        Raises:
            FileNotFoundError: If CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        text = csv_path.read_text(encoding="utf-8-sig")
        logger.info("Importing transactions from %s", csv_path)
        return self.import_csv_text(text)

    def _reconcile(self, numbered_rows: Iterable[tuple[int, Mapping[Any, Any]]]) -> ImportResult:
        imported = 0
        skipped: list[SkippedRow] = []

        for row_num, row in numbered_rows:
            try:
                transaction = row_to_transaction(row)
            except ValueError as e:
                logger.warning("Skipping import row %d: %s", row_num, e)
                skipped.append(SkippedRow(row_num=row_num, reason=str(e)))
                continue

            try:
                self.store.put(transaction)
            except StorageError:
                self.cache.invalidate()
                raise
            imported += 1

        self.cache.reload()
        logger.info("Import finished: %d written, %d skipped", imported, len(skipped))
        return ImportResult(imported=imported, skipped=tuple(skipped))
