"""
Core business logic for calculating open slots over a week.

This is the heart of the application - pure domain logic without any
external dependencies (no database, no I/O).
"""

import logging
from datetime import date
from typing import Dict, List, Sequence, Set

from pendulum import Date

from .dates import DateLike, day_of_any
from .models import AvailabilityDay, AvailabilityWindow, Event, EventBatch, SlotLabel, WINDOW_DAYS
from .recurrence import DEFAULT_CLOSED_WEEKDAYS, project_all
from .slot_grid import DEFAULT_SLOT_MINUTES, expand_interval

logger = logging.getLogger(__name__)


class DayAggregator:
    """
    Accumulates slot labels per calendar date.

    Openings are unioned into the set of the day they start on, appointments
    are removed from it. One aggregator serves a single calculation.
    """

    def __init__(self, slot_minutes: int = DEFAULT_SLOT_MINUTES):
        self.slot_minutes = slot_minutes
        self._slots_by_day: Dict[Date, Set[SlotLabel]] = {}

    def add_opening(self, opening: Event) -> None:
        """Union the slots of an opening into its day."""
        slots = expand_interval(opening.starts_at, opening.ends_at, self.slot_minutes)
        self._slots_by_day.setdefault(opening.day, set()).update(slots)

    def remove_appointment(self, appointment: Event) -> None:
        """Remove the slots taken by an appointment from its day."""
        day_slots = self._slots_by_day.get(appointment.day)
        if not day_slots:
            return

        day_slots.difference_update(
            expand_interval(appointment.starts_at, appointment.ends_at, self.slot_minutes)
        )

    def slots_for(self, day: date) -> Set[SlotLabel]:
        """Return the slots of a day; unknown days have none."""
        return set(self._slots_by_day.get(day, ()))


class AvailabilityCalculator:
    """
    Calculates the open slots of the seven days starting at a given date.

    Algorithm:
    1. Project weekly-recurring openings onto the matching window dates
    2. Union the slots of projected and one-off openings per day
    3. Subtract the slots taken by appointments
    4. Emit every window date in order with sorted slots
    """

    def __init__(
        self,
        slot_minutes: int = DEFAULT_SLOT_MINUTES,
        closed_weekdays: Sequence[int] = DEFAULT_CLOSED_WEEKDAYS
    ):
        if slot_minutes <= 0:
            raise ValueError(f"slot_minutes must be greater than zero, got {slot_minutes}")
        self.slot_minutes = slot_minutes
        self.closed_weekdays = tuple(closed_weekdays)

    def availabilities_from_events(
        self,
        events: EventBatch,
        start_date: DateLike
    ) -> List[AvailabilityDay]:
        """
        Compute availabilities from already fetched events.

        Args:
            events: Appointments and openings relevant to the window
            start_date: First day of the window; datetimes are truncated

        Returns:
            Exactly seven AvailabilityDay entries in ascending date order
        """
        window = AvailabilityWindow(start=day_of_any(start_date), days=WINDOW_DAYS)
        aggregator = self.aggregate(events, window)
        return self.format_window(aggregator, window)

    def aggregate(self, events: EventBatch, window: AvailabilityWindow) -> DayAggregator:
        """Build the per-day slot sets for a window."""
        aggregator = DayAggregator(slot_minutes=self.slot_minutes)

        projected = project_all(events.recurring_openings, window, self.closed_weekdays)
        logger.debug(
            "Projected %d recurring opening(s) onto %d date(s)",
            len(events.recurring_openings),
            len(projected),
        )

        for opening in projected:
            aggregator.add_opening(opening)

        for opening in events.non_recurring_openings:
            aggregator.add_opening(opening)

        for appointment in events.appointments:
            aggregator.remove_appointment(appointment)

        return aggregator

    @staticmethod
    def format_window(aggregator: DayAggregator, window: AvailabilityWindow) -> List[AvailabilityDay]:
        """Assemble one entry per window date with chronologically sorted slots."""
        return [
            AvailabilityDay(date=day, slots=sorted(aggregator.slots_for(day)))
            for day in window.dates()
        ]
