"""Pure filtering of the working set."""

from typing import Iterable, Union

from cashledger.domain.entities import ALL, FilterCriteria, Transaction


def _choice(value: Union[str, object]) -> str:
    return str(getattr(value, "value", value)).strip().lower()


def matches_search(transaction: Transaction, term: str) -> bool:
    """Case-insensitive substring match against remarks, id, reference ID
    and counterparty. Missing fields never match."""
    needle = term.casefold()
    fields = (
        transaction.remarks,
        transaction.id,
        transaction.reference_id,
        transaction.counterparty,
    )
    return any(value and needle in value.casefold() for value in fields)


def matches(transaction: Transaction, criteria: FilterCriteria) -> bool:
    """Return True if the transaction satisfies every active predicate."""
    if criteria.start_date is not None and transaction.date < criteria.start_date:
        return False
    if criteria.end_date is not None and transaction.date > criteria.end_date:
        return False

    kind = _choice(criteria.kind)
    if kind != ALL and transaction.kind.value != kind:
        return False

    payment_mode = _choice(criteria.payment_mode)
    if payment_mode != ALL and transaction.payment_mode.value != payment_mode:
        return False

    if criteria.search_term and not matches_search(transaction, criteria.search_term):
        return False
    return True


def filter_transactions(
    transactions: Iterable[Transaction], criteria: FilterCriteria
) -> tuple[Transaction, ...]:
    """Keep the transactions matching ``criteria``, preserving input order."""
    return tuple(txn for txn in transactions if matches(txn, criteria))
