"""
Pure date helpers used by the availability computation.

Every helper returns a new value; pendulum instances are immutable, so none
of these functions can alter a date shared with the caller.
"""

from datetime import date, datetime, time
from typing import Union

import pendulum
from pendulum import Date, DateTime

SUNDAY = 6

DateLike = Union[date, datetime, str]


def weekday_of(value: date) -> int:
    """Return the weekday of a date or datetime, 0=Monday ... 6=Sunday."""
    return value.weekday()


def add_days(value, days: int):
    """Return ``value`` shifted by ``days`` calendar days."""
    return value.add(days=days)


def time_of_day(value: datetime) -> time:
    """Return the wall-clock time of a datetime, without its date."""
    return value.time()


def day_of(value: datetime) -> Date:
    """Return the calendar date a datetime falls on."""
    return pendulum.date(value.year, value.month, value.day)


def rebase(value: DateTime, day: date) -> DateTime:
    """Move ``value`` onto ``day`` keeping its time-of-day."""
    return value.set(year=day.year, month=day.month, day=day.day)


def days_between(first: date, second: date) -> int:
    """Number of calendar days from ``first`` to ``second``."""
    return second.toordinal() - first.toordinal()


def day_of_any(value: DateLike) -> Date:
    """
    Normalise a date-like value to a pendulum Date.

    Accepts ``date``/``datetime`` objects (pendulum or stdlib) and ISO-8601
    strings. Datetimes are truncated to their calendar date.

    Raises:
        ValueError: If a string cannot be parsed as a date
    """
    if isinstance(value, str):
        parsed = pendulum.parse(value, exact=True)
        if isinstance(parsed, (datetime, date)):
            return pendulum.date(parsed.year, parsed.month, parsed.day)
        raise ValueError(f"Could not parse date: {value}")

    return pendulum.date(value.year, value.month, value.day)
