"""
Date helpers for bet timestamps.

All comparisons happen on naive local datetimes, matching how the
dashboard presents calendar days to the user.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Any, Optional


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Parse a stored timestamp.

    Accepts datetime, date and ISO-8601 strings (a trailing ``Z`` is
    read as UTC). Anything else yields None.
    """
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return to_local_naive(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def start_of_day(value: datetime) -> datetime:
    """Midnight at the start of the given day."""
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def subtract_months(value: datetime, months: int) -> datetime:
    """
    Calendar month arithmetic.

    The day is clamped to the length of the target month, so
    31 March minus one month is 28 (or 29) February.
    """
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def trailing_days(now: datetime, days: int) -> list[datetime]:
    """Day starts for the last ``days`` days ending today, oldest first."""
    today = start_of_day(now)
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
