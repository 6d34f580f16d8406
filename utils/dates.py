"""
Calendar helpers shared by the calculators.

All dates are naive local calendar dates; periods are YYYY-MM strings.
"""

import re
from datetime import date, datetime
from typing import Optional, Tuple, Union

from utils.exceptions import InvalidDateError, InvalidPeriodError

DateLike = Union[date, datetime, str]

_PERIOD_PATTERN = re.compile(r'(\d{4})-(\d{2})')

# Annual returns fall due up to two calendar years after the period
MIN_PERIOD_YEAR = 1
MAX_PERIOD_YEAR = 9997


def parse_period(period: str) -> Tuple[int, int]:
    """Split a YYYY-MM period into (year, month)"""
    match = _PERIOD_PATTERN.fullmatch(period) if isinstance(period, str) else None
    if not match:
        raise InvalidPeriodError(period)

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidPeriodError(period, {'reason': 'month out of range'})
    if not MIN_PERIOD_YEAR <= year <= MAX_PERIOD_YEAR:
        raise InvalidPeriodError(period, {'reason': 'year out of range'})
    return year, month


def format_period(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def next_month(year: int, month: int) -> Tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def to_date(value: DateLike) -> date:
    """Coerce a date, datetime or YYYY-MM-DD string to a date (time dropped)"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            # Accept full ISO timestamps too; only the calendar date matters
            return date.fromisoformat(value[:10])
        except ValueError:
            raise InvalidDateError(value)
    raise InvalidDateError(value, {'type': type(value).__name__})


def to_optional_date(value: Optional[DateLike]) -> Optional[date]:
    if value is None or value == '':
        return None
    return to_date(value)


def format_date(value: date) -> str:
    return value.isoformat()


def days_between(start: DateLike, end: DateLike) -> int:
    """Whole days from start to end (negative when end precedes start)"""
    return (to_date(end) - to_date(start)).days


def resolve_today(today: Optional[DateLike] = None) -> date:
    """The injected 'today', or the system date when none is given"""
    if today is None:
        return date.today()
    return to_date(today)
