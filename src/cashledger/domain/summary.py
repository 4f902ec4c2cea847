"""Credit/debit aggregation."""

from decimal import Decimal
from typing import Iterable

from cashledger.domain.entities import LedgerSummary, Transaction, TransactionKind


def summarize(transactions: Iterable[Transaction]) -> LedgerSummary:
    """Total credits and debits with exact decimal arithmetic.

    Args:
        transactions: Any transaction sequence, usually a filtered view

    Returns:
        LedgerSummary where balance = credit - debit (all zero when empty)
    """
    credit = Decimal("0")
    debit = Decimal("0")
    for txn in transactions:
        if txn.kind is TransactionKind.CREDIT:
            credit += txn.amount
        else:
            debit += txn.amount
    return LedgerSummary(credit=credit, debit=debit, balance=credit - debit)
