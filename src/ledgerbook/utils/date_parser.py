"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("this-month", "last-month", "this-year", "last-year", "this-week", "last-week")


def _start_of(period: str, today: date) -> date:
    if period == "month":
        return today.replace(day=1)
    if period == "year":
        return today.replace(month=1, day=1)
    if period == "week":
        return today - timedelta(days=today.weekday())
    raise ValueError(f"Unknown period '{period}'")


def _shift(period: str, amount: int) -> relativedelta:
    if period == "week":
        return relativedelta(weeks=amount)
    if period == "month":
        return relativedelta(months=amount)
    return relativedelta(years=amount)


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports:
    - ISO dates: "2024-01-15"
    - Other absolute formats understood by dateutil: "January 15, 2024"
    - "today", "yesterday", "tomorrow"
    - "this month", "last year", "next week", ...: first day of that period

    Args:
        date_str: Date string
        today: Reference day for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    if today is None:
        today = date.today()

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    fixed = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in fixed:
        return fixed[text]

    words = text.split()
    if len(words) == 2 and words[0] in ("this", "last", "next") and words[1] in ("week", "month", "year"):
        offset = {"this": 0, "last": -1, "next": 1}[words[0]]
        return _start_of(words[1], today + _shift(words[1], offset))

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Current periods end today; past periods end on their last day.

    Args:
        period: One of this-month, last-month, this-year, last-year, this-week, last-week
        today: Reference day (defaults to date.today())

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    if period not in PERIODS:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
    if today is None:
        today = date.today()

    which, unit = period.split("-")
    if which == "this":
        return _start_of(unit, today), today

    start = _start_of(unit, today + _shift(unit, -1))
    end = _start_of(unit, today) - timedelta(days=1)
    return start, end
