"""Utility functions for cashledger."""

from cashledger.utils.date_parser import parse_date, parse_iso_date, parse_time, get_date_range
from cashledger.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_iso_date", "parse_time", "get_date_range", "parse_amount"]
