"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "₹123.45"
    - "1,234.56"
    - "-123.45"

    Non-finite values ("NaN", "Infinity") are rejected. The sign is kept;
    callers decide whether a non-positive amount is acceptable.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount, exactly as written (no rounding)

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    amount_str = str(amount_str).strip()

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥₹]", "", amount_str)

    # Remove thousands separators
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'") from None

    if not amount.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a finite number")
    return amount
