"""
Discretisation of time intervals onto the slot grid.
"""

from typing import Set

from pendulum import DateTime

from .dates import days_between, time_of_day
from .models import MINUTES_PER_DAY, SlotLabel

DEFAULT_SLOT_MINUTES = 30

SECONDS_PER_DAY = MINUTES_PER_DAY * 60


def expand_interval(
    start: DateTime,
    end: DateTime,
    slot_minutes: int = DEFAULT_SLOT_MINUTES
) -> Set[SlotLabel]:
    """
    Convert the half-open interval ``[start, end)`` into slot labels.

    Labels start at ``start``'s time-of-day and step by ``slot_minutes``
    while strictly before ``end``. An interval running past midnight is
    clipped to the end of the day it starts on.

    Example (30 minute grid):
    09:00 - 10:30 -> {9:00, 9:30, 10:00}

    Returns an empty set for a malformed interval (start >= end).
    """
    if slot_minutes <= 0:
        raise ValueError(f"slot_minutes must be greater than zero, got {slot_minutes}")

    if start >= end:
        return set()

    start_second = _seconds_into_day(start)

    if days_between(start, end) > 0:
        end_second = SECONDS_PER_DAY
    else:
        end_second = _seconds_into_day(end)

    step = slot_minutes * 60
    return {
        SlotLabel(minutes=second // 60)
        for second in range(start_second, end_second, step)
    }


def _seconds_into_day(value: DateTime) -> int:
    clock = time_of_day(value)
    return clock.hour * 3600 + clock.minute * 60 + clock.second
