"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, time

from obligation_engine.domain.exceptions import DateConstructionError


def last_day_of_month(year: int, month: int) -> int:
    """Number of days in the given month"""
    return calendar.monthrange(year, month)[1]


def clamped_date(year: int, month: int, day: int) -> date:
    """Build a date, clamping day to the last valid day of the month (31 in April -> 30)"""
    try:
        return date(year, month, min(day, last_day_of_month(year, month)))
    except (ValueError, OverflowError, calendar.IllegalMonthError) as e:
        raise DateConstructionError(f"Cannot build date {year}-{month}-{day}: {e}") from e


def add_months(d: date, months: int, day: int | None = None) -> date:
    """
    Add calendar months to a date.

    The day of month is kept where valid and clamped otherwise
    (Jan 31 + 1 month -> Feb 28/29). Pass ``day`` to pin the result
    to a different target day of month.
    """
    index = d.month - 1 + months
    year = d.year + index // 12
    month = index % 12 + 1
    return clamped_date(year, month, d.day if day is None else day)


def add_years(d: date, years: int) -> date:
    """Add calendar years, clamping Feb 29 to Feb 28 in non-leap years"""
    return clamped_date(d.year + years, d.month, d.day)


def as_datetime(value: date | datetime) -> datetime:
    """Treat a plain date as midnight of that day"""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def as_date(value: date | datetime) -> date:
    """Drop the time component, if any"""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Whole calendar days from start to end (negative when end is earlier)"""
    return (as_date(end) - as_date(start)).days


def months_between(start: date, end: date) -> int:
    """Whole calendar months elapsed from start to end"""
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return months
