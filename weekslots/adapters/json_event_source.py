"""
Event source backed by a JSON file of event records.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

import pendulum
from pydantic import BaseModel, ValidationError

from ..domain.exceptions import EventSourceError, InvalidEventError
from ..domain.models import AvailabilityWindow, Event, EventKind

logger = logging.getLogger(__name__)


class EventRecord(BaseModel):
    """
    One stored event row.

    ``weekly_recurring`` accepts booleans as well as the 0/1 integers SQL
    stores tend to return.
    """
    kind: EventKind
    starts_at: datetime
    ends_at: datetime
    weekly_recurring: bool = False

    def to_event(self, timezone: str = "UTC") -> Event:
        """Convert the record to a domain Event; naive instants get ``timezone``."""
        return Event(
            kind=self.kind,
            starts_at=pendulum.instance(self.starts_at, tz=timezone),
            ends_at=pendulum.instance(self.ends_at, tz=timezone),
            weekly_recurring=self.weekly_recurring and self.kind is EventKind.OPENING,
        )


def parse_event_record(record: Mapping[str, Any], timezone: str = "UTC") -> Event:
    """
    Parse a raw record into an Event.

    Raises:
        InvalidEventError: If the record is missing fields or has bad values
    """
    try:
        return EventRecord.model_validate(record).to_event(timezone)
    except ValidationError as exc:
        raise InvalidEventError(f"Invalid event record {dict(record)!r}: {exc}") from exc


class JsonEventSource:
    """
    Event source reading event records from a JSON file.

    The file holds a list of records:

        [
            {
                "kind": "opening",
                "starts_at": "2014-08-04T09:30:00",
                "ends_at": "2014-08-04T12:30:00",
                "weekly_recurring": true
            }
        ]

    Records are loaded once and cached. Invalid records are skipped with a
    warning; an unreadable file raises EventSourceError on every query.
    """

    def __init__(self, path: Optional[Path] = None, timezone: str = "UTC"):
        """
        Initialize the source.

        Args:
            path: JSON file with event records
            timezone: IANA timezone identifier attached to naive instants
        """
        self.path = path
        self.timezone = timezone
        self._events: Optional[List[Event]] = None

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        timezone: str = "UTC"
    ) -> "JsonEventSource":
        """Build a source over in-memory records instead of a file."""
        source = cls(path=None, timezone=timezone)
        source._events = source._parse_records(list(records))
        return source

    def load_events(self) -> List[Event]:
        """
        Return every event of the source, loading the file on first use.

        Raises:
            EventSourceError: If the file cannot be read or is not a JSON list
        """
        if self._events is None:
            self._events = self._parse_records(self._read_records())
        return list(self._events)

    def _read_records(self) -> List[Any]:
        if self.path is None:
            raise EventSourceError("No events file configured.")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as exc:
            raise EventSourceError(f"Could not read events file {self.path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise EventSourceError(f"Invalid JSON in {self.path}: {exc}") from exc

        if not isinstance(data, list):
            raise EventSourceError(f"Events file {self.path} must contain a list of records.")

        return data

    def _parse_records(self, records: List[Any]) -> List[Event]:
        events: List[Event] = []

        for index, record in enumerate(records):
            if not isinstance(record, Mapping):
                logger.warning("Skipping event record #%d: not an object", index)
                continue

            try:
                events.append(parse_event_record(record, self.timezone))
            except InvalidEventError as exc:
                logger.warning("Skipping event record #%d: %s", index, exc)

        logger.debug("Loaded %d event(s) from %s", len(events), self.path or "records")
        return events

    # Queries compare civil dates, so an instant's own offset decides its day.

    async def get_appointments(self, window: AvailabilityWindow) -> List[Event]:
        """Appointments starting on a date of ``window``."""
        return [
            event for event in self.load_events()
            if event.is_appointment and window.contains(event.day)
        ]

    async def get_recurring_openings(self, window: AvailabilityWindow) -> List[Event]:
        """Weekly-recurring openings first scheduled before ``window`` ends."""
        return [
            event for event in self.load_events()
            if event.is_recurring_opening and event.day < window.end
        ]

    async def get_non_recurring_openings(self, window: AvailabilityWindow) -> List[Event]:
        """One-off openings starting on a date of ``window``."""
        return [
            event for event in self.load_events()
            if event.is_opening and not event.weekly_recurring and window.contains(event.day)
        ]
