"""CSV export and tabular report rows."""

import csv
import io
from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Union

from cashledger.domain.entities import Transaction

CSV_COLUMNS = (
    "id",
    "date",
    "time",
    "paymentMode",
    "kind",
    "amount",
    "counterparty",
    "remarks",
    "referenceId",
)

REPORT_HEADERS = (
    "Date",
    "Time",
    "Payment Mode",
    "Kind",
    "Ref ID",
    "User",
    "Remarks",
    "Amount",
)


def transaction_to_csv_values(transaction: Transaction) -> list[str]:
    """Field values in export column order; None becomes an empty string."""
    values: list[Optional[object]] = [
        transaction.id,
        transaction.date.isoformat(),
        transaction.time,
        transaction.payment_mode.value,
        transaction.kind.value,
        transaction.amount,
        transaction.counterparty,
        transaction.remarks,
        transaction.reference_id,
    ]
    return ["" if value is None else str(value) for value in values]


def export_csv(transactions: Iterable[Transaction]) -> str:
    """Render transactions as CSV text.

    The header line is unquoted; every data field is double-quoted.
    """
    buffer = io.StringIO()
    buffer.write(",".join(CSV_COLUMNS) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(transaction_to_csv_values(txn) for txn in transactions)
    return buffer.getvalue()


def default_export_filename(today: Optional[date] = None) -> str:
    """File name used when the caller does not choose one."""
    return f"transactions_{(today or date.today()).isoformat()}.csv"


def write_csv_export(path: Union[str, Path], transactions: Iterable[Transaction]) -> Path:
    """Write the CSV export to ``path`` and return it."""
    output = Path(path)
    output.write_text(export_csv(transactions), encoding="utf-8")
    return output


def build_report_rows(transactions: Iterable[Transaction]) -> list[tuple[str, ...]]:
    """Rows of the printable report, in REPORT_HEADERS order."""
    return [
        (
            txn.date.isoformat(),
            txn.time,
            txn.payment_mode.value,
            txn.kind.value,
            txn.reference_id or "-",
            txn.counterparty,
            txn.remarks,
            f"{txn.amount:,.2f}",
        )
        for txn in transactions
    ]
