"""
Projection of weekly-recurring openings onto the dates of a window.
"""

import logging
from typing import Iterable, List, Sequence

from .dates import SUNDAY, add_days, days_between, rebase, weekday_of
from .models import AvailabilityWindow, Event

logger = logging.getLogger(__name__)

# Weekly openings follow the business calendar: Sunday is always closed.
DEFAULT_CLOSED_WEEKDAYS = (SUNDAY,)


def project_recurring(
    opening: Event,
    window: AvailabilityWindow,
    closed_weekdays: Sequence[int] = DEFAULT_CLOSED_WEEKDAYS
) -> List[Event]:
    """
    Re-base a weekly-recurring opening onto every matching date of a window.

    A date matches when it falls on the opening's weekday, is not a closed
    weekday and is not before the date the opening was first scheduled.
    The time-of-day of both ends, and the number of days between them, are
    preserved.
    """
    weekday = weekday_of(opening.starts_at)
    if weekday in closed_weekdays:
        return []

    first_day = opening.day
    span_days = days_between(opening.starts_at, opening.ends_at)

    projected: List[Event] = []

    for day in window.dates():
        if weekday_of(day) != weekday or day < first_day:
            continue

        starts_at = rebase(opening.starts_at, day)
        ends_at = rebase(opening.ends_at, add_days(day, span_days))
        projected.append(opening.with_times(starts_at, ends_at))

    if not projected:
        logger.debug("Recurring opening %s has no date in window starting %s", opening, window.start)

    return projected


def project_all(
    openings: Iterable[Event],
    window: AvailabilityWindow,
    closed_weekdays: Sequence[int] = DEFAULT_CLOSED_WEEKDAYS
) -> List[Event]:
    """Project several recurring openings, flattening the result."""
    projected: List[Event] = []
    for opening in openings:
        projected.extend(project_recurring(opening, window, closed_weekdays))
    return projected
