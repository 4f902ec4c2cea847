"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from cashledger.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("500", Decimal("500")),
        ("123.45", Decimal("123.45")),
        ("1,234.56", Decimal("1234.56")),
        ("₹99.90", Decimal("99.90")),
        (" $10 ", Decimal("10")),
        ("-5.25", Decimal("-5.25")),
        ("0.001", Decimal("0.001")),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


def test_parse_amount_keeps_precision():
    assert str(parse_amount("10.10")) == "10.10"


@pytest.mark.parametrize("raw", ["", "   ", "abc", "NaN", "Infinity", "12.3.4"])
def test_parse_amount_rejects(raw):
    with pytest.raises(ValueError):
        parse_amount(raw)
