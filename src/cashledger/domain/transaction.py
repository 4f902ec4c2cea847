"""Transaction construction and validation for manual entry."""

import uuid
from datetime import date as date_type
from decimal import Decimal
from typing import Any, Optional, Union

from cashledger.domain.entities import PaymentMode, Transaction, TransactionKind
from cashledger.domain.errors import (
    ValidationError,
    missing_field,
    reference_required,
)
from cashledger.utils.amount_parser import parse_amount
from cashledger.utils.date_parser import parse_date, parse_time


def new_transaction_id() -> str:
    """Generate a globally unique transaction id."""
    return str(uuid.uuid4())


def parse_kind(value: Union[str, TransactionKind]) -> TransactionKind:
    """Normalize a kind value (any case) to ``TransactionKind``.

    Raises:
        ValidationError: If the value is not credit or debit
    """
    if isinstance(value, TransactionKind):
        return value
    try:
        return TransactionKind(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Kind must be credit or debit, got '{value}'") from None


def parse_payment_mode(value: Union[str, PaymentMode]) -> PaymentMode:
    """Normalize a payment mode value (any case) to ``PaymentMode``.

    Raises:
        ValidationError: If the value is not cash or online
    """
    if isinstance(value, PaymentMode):
        return value
    try:
        return PaymentMode(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Payment mode must be cash or online, got '{value}'") from None


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_text(value: Any, field_name: str) -> str:
    text = _clean_text(value)
    if text is None:
        raise ValidationError(missing_field(field_name))
    return text


def _require_choice(value: Any, field_name: str) -> Any:
    if isinstance(value, (TransactionKind, PaymentMode)):
        return value
    return _require_text(value, field_name)


def _coerce_date(value: Union[str, date_type, None]) -> date_type:
    if isinstance(value, date_type):
        return value
    text = _require_text(value, "Date")
    try:
        return parse_date(text)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {e}") from e


def _coerce_time(value: Optional[str]) -> str:
    text = _require_text(value, "Time")
    try:
        return parse_time(text)
    except ValueError as e:
        raise ValidationError(f"Invalid time: {e}") from e


def _coerce_amount(value: Union[str, Decimal, int, None]) -> Decimal:
    if isinstance(value, Decimal):
        amount = value
    else:
        text = _require_text(value, "Amount")
        try:
            amount = parse_amount(text)
        except ValueError as e:
            raise ValidationError(f"Invalid amount: {e}") from e
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    return amount


def build_transaction(
    *,
    date: Union[str, date_type, None],
    time: Optional[str],
    amount: Union[str, Decimal, int, None],
    kind: Union[str, TransactionKind, None],
    payment_mode: Union[str, PaymentMode, None],
    counterparty: Optional[str],
    remarks: Optional[str],
    reference_id: Optional[str] = None,
    transaction_id: Optional[str] = None,
) -> Transaction:
    """Build a validated transaction from manually entered values.

    A fresh id is generated unless ``transaction_id`` is given (edits keep
    the original id). Text fields are stripped; an empty reference ID is
    stored as None.

    Raises:
        ValidationError: If a required field is missing, the amount is not
            positive, kind or payment mode is unknown, or the reference ID
            is missing for an online payment
    """
    txn_kind = parse_kind(_require_choice(kind, "Kind"))
    txn_date = _coerce_date(date)
    txn_time = _coerce_time(time)
    txn_mode = parse_payment_mode(_require_choice(payment_mode, "Payment mode"))
    txn_amount = _coerce_amount(amount)

    reference = _clean_text(reference_id)
    if txn_mode is PaymentMode.ONLINE and reference is None:
        raise ValidationError(reference_required())

    return Transaction(
        id=_clean_text(transaction_id) or new_transaction_id(),
        date=txn_date,
        time=txn_time,
        amount=txn_amount,
        kind=txn_kind,
        payment_mode=txn_mode,
        counterparty=_require_text(counterparty, "Counterparty"),
        remarks=_require_text(remarks, "Remarks"),
        reference_id=reference,
    )


def replace_transaction(existing: Transaction, **changes: Any) -> Transaction:
    """Build the full replacement of ``existing`` with ``changes`` applied.

    A change of None keeps the stored value; an empty ``reference_id``
    clears it. The result is re-validated as a whole.
    """
    values = {
        "date": existing.date,
        "time": existing.time,
        "amount": existing.amount,
        "kind": existing.kind,
        "payment_mode": existing.payment_mode,
        "counterparty": existing.counterparty,
        "remarks": existing.remarks,
        "reference_id": existing.reference_id,
    }
    unknown = set(changes) - set(values)
    if unknown:
        raise ValidationError(f"Unknown transaction field(s): {', '.join(sorted(unknown))}")
    values.update({key: value for key, value in changes.items() if value is not None})
    return build_transaction(transaction_id=existing.id, **values)
