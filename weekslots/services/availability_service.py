"""
Application services for computing the week's availabilities.

The service coordinates fetching events via an event source adapter and
delegates the actual slot computation to the domain-level
``AvailabilityCalculator``. A failing source never reaches the calculator:
its category is replaced by an empty list so callers still get a complete
week, only with less availability.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Protocol

from ..domain.availability_calculator import AvailabilityCalculator
from ..domain.dates import DateLike, day_of_any
from ..domain.models import AvailabilityDay, AvailabilityWindow, Event, EventBatch

logger = logging.getLogger(__name__)


class EventSourceProtocol(Protocol):
    """Protocol describing the event storage behaviour needed by the service."""

    async def get_appointments(self, window: AvailabilityWindow) -> List[Event]:
        """Return appointments starting on a date of ``window``."""

    async def get_recurring_openings(self, window: AvailabilityWindow) -> List[Event]:
        """Return weekly-recurring openings first scheduled before ``window`` ends."""

    async def get_non_recurring_openings(self, window: AvailabilityWindow) -> List[Event]:
        """Return one-off openings starting on a date of ``window``."""


class AvailabilityService:
    """
    Orchestrates event retrieval and availability calculation.

    Dependency inversion toward a protocol makes it easy to plug in the JSON
    adapter or a stub implementation in tests.
    """

    def __init__(
        self,
        event_source: EventSourceProtocol,
        calculator: AvailabilityCalculator,
    ) -> None:
        self._event_source = event_source
        self._calculator = calculator

    async def get_availabilities(self, date: DateLike) -> List[AvailabilityDay]:
        """Fetch the week's events and compute availabilities for ``date`` onward."""
        events = await self.fetch_events(date)
        return self.calculate_availabilities(events, date)

    async def fetch_events(self, date: DateLike) -> EventBatch:
        """
        Concurrently fetch appointments and openings for the week from ``date``.

        A query that raises is logged and replaced by an empty list; the
        other queries' results are kept.
        """
        window = AvailabilityWindow(start=day_of_any(date))

        results = await asyncio.gather(
            self._event_source.get_appointments(window),
            self._event_source.get_recurring_openings(window),
            self._event_source.get_non_recurring_openings(window),
            return_exceptions=True,
        )

        appointments, recurring_openings, non_recurring_openings = [
            self._events_or_empty(name, result)
            for name, result in zip(
                ("appointments", "recurring openings", "non-recurring openings"),
                results,
            )
        ]

        return EventBatch(
            appointments=appointments,
            recurring_openings=recurring_openings,
            non_recurring_openings=non_recurring_openings,
        )

    def calculate_availabilities(self, events: EventBatch, date: DateLike) -> List[AvailabilityDay]:
        """Calculate availabilities from already fetched events."""
        return self._calculator.availabilities_from_events(events, date)

    @staticmethod
    def _events_or_empty(name: str, result) -> List[Event]:
        if isinstance(result, Exception):
            logger.warning("Fetching %s failed, continuing without them: %s", name, result)
            return []

        # Cancellation and interpreter exits are not fetch failures
        if isinstance(result, BaseException):
            raise result

        return list(result)
