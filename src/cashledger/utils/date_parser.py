"""Date and time parsing utilities."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

TIME_FORMATS = ("%H:%M", "%H:%M:%S")

PERIODS = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def _period_start(period: str, today: date) -> date:
    """First day of a named period relative to ``today``."""
    if period == "this-month":
        return today.replace(day=1)
    if period == "this-year":
        return today.replace(month=1, day=1)
    if period == "this-week":
        return today - timedelta(days=today.weekday())
    if period == "last-month":
        return (today - relativedelta(months=1)).replace(day=1)
    if period == "last-year":
        return today.replace(month=1, day=1) - relativedelta(years=1)
    if period == "last-week":
        # Monday of last week
        return today - timedelta(days=today.weekday() + 7)
    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.
      A relative period resolves to its first day.

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    offsets = {"today": 0, "yesterday": -1, "tomorrow": 1}
    if date_str in offsets:
        return today + timedelta(days=offsets[date_str])

    period = date_str.replace(" ", "-")
    if period in PERIODS:
        return _period_start(period, today)

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_iso_date(date_str: str) -> date:
    """Parse a calendar date written strictly as ``YYYY-MM-DD``.

    Relative words and partial dates are rejected, so the result never
    depends on the day the text is read.

    Raises:
        ValueError: If date string is not in ``YYYY-MM-DD`` form
    """
    date_str = date_str.strip()
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Could not parse date '{date_str}': expected YYYY-MM-DD") from None


def parse_time(time_str: str) -> str:
    """Parse a wall-clock time and normalize it to ``HH:MM``.

    Accepts "9:05", "09:05" and "09:05:30" (seconds are dropped).

    Raises:
        ValueError: If time string cannot be parsed
    """
    time_str = time_str.strip()
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(time_str, fmt).strftime("%H:%M")
        except ValueError:
            continue
    raise ValueError(f"Could not parse time '{time_str}': expected HH:MM")


def current_time() -> str:
    """Return the current local wall-clock time as ``HH:MM``."""
    return datetime.now().strftime("%H:%M")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Periods starting with "this-" end today; "last-" periods end on their
    last calendar day.

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()
    start = _period_start(period, today)

    if period.startswith("this-"):
        return (start, today)
    if period == "last-month":
        return (start, today.replace(day=1) - timedelta(days=1))
    if period == "last-year":
        return (start, today.replace(month=1, day=1) - timedelta(days=1))
    return (start, start + timedelta(days=6))
