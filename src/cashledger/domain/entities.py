"""Domain model entities for cashledger.

These are pure data classes representing ledger concepts, independent of
the database schema. The persistence layer maps its rows onto them.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

PASSWORD_CONFIG_KEY = "passwordHash"

ALL = "all"


class TransactionKind(str, Enum):
    """Direction of money flow."""

    CREDIT = "credit"
    DEBIT = "debit"


class PaymentMode(str, Enum):
    """How the money moved."""

    CASH = "cash"
    ONLINE = "online"


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: str
    date: date
    time: str
    amount: Decimal
    kind: TransactionKind
    payment_mode: PaymentMode
    counterparty: str
    remarks: str
    reference_id: Optional[str] = None


@dataclass(frozen=True)
class ConfigEntry:
    """Key/value application setting."""

    key: str
    value: str


@dataclass(frozen=True)
class FilterCriteria:
    """Filter specification for the working set.

    ``kind`` and ``payment_mode`` accept ``"all"`` or one of the enum values.
    """

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    kind: str = ALL
    payment_mode: str = ALL
    search_term: Optional[str] = None


@dataclass(frozen=True)
class LedgerSummary:
    """Credit/debit totals of a transaction sequence."""

    credit: Decimal = Decimal("0")
    debit: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class WorkingSet:
    """Immutable snapshot of every stored transaction in canonical order."""

    transactions: tuple[Transaction, ...] = ()
    counterparties: tuple[str, ...] = ()


@dataclass(frozen=True)
class LedgerView:
    """Filtered transactions together with their totals."""

    transactions: tuple[Transaction, ...]
    summary: LedgerSummary


@dataclass(frozen=True)
class SkippedRow:
    """An import row that was left out of the batch."""

    row_num: int
    reason: str


@dataclass(frozen=True)
class ImportResult:
    """Outcome of one import batch."""

    imported: int = 0
    skipped: tuple[SkippedRow, ...] = field(default_factory=tuple)
