"""
Domain models for events, slot labels and availability windows.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List

from pendulum import Date, DateTime

from .dates import add_days, day_of

MINUTES_PER_DAY = 24 * 60
WINDOW_DAYS = 7


class EventKind(str, Enum):
    """Kinds of calendar events as they are stored."""
    OPENING = "opening"
    APPOINTMENT = "appointment"


@dataclass(frozen=True)
class Event:
    """
    A calendar event: available time (opening) or occupied time (appointment).

    Unlike a strict time range, an event is allowed to be malformed
    (``starts_at >= ends_at``). Such events are kept and contribute nothing
    when expanded to slots.
    """
    kind: EventKind
    starts_at: DateTime
    ends_at: DateTime
    weekly_recurring: bool = False

    @property
    def day(self) -> Date:
        """Calendar date the event starts on."""
        return day_of(self.starts_at)

    @property
    def is_opening(self) -> bool:
        return self.kind is EventKind.OPENING

    @property
    def is_appointment(self) -> bool:
        return self.kind is EventKind.APPOINTMENT

    @property
    def is_recurring_opening(self) -> bool:
        return self.is_opening and self.weekly_recurring

    def is_malformed(self) -> bool:
        """Return True if the event does not end after it starts."""
        return self.starts_at >= self.ends_at

    def with_times(self, starts_at: DateTime, ends_at: DateTime) -> "Event":
        """Return a copy of this event with other start and end instants."""
        return Event(
            kind=self.kind,
            starts_at=starts_at,
            ends_at=ends_at,
            weekly_recurring=self.weekly_recurring,
        )

    def __str__(self) -> str:
        recurring = " (weekly)" if self.weekly_recurring else ""
        return (
            f"{self.kind.value} {self.starts_at.format('YYYY-MM-DD HH:mm')}"
            f" - {self.ends_at.format('HH:mm')}{recurring}"
        )


@dataclass(frozen=True, order=True)
class SlotLabel:
    """
    A time-of-day on the slot grid, e.g. ``9:30``.

    Labels compare by time-of-day only; the date a label was derived from is
    not part of its identity.
    """
    minutes: int

    def __post_init__(self):
        if not 0 <= self.minutes < MINUTES_PER_DAY:
            raise ValueError(f"Slot minutes must be within a day, got {self.minutes}")

    @property
    def hour(self) -> int:
        return self.minutes // 60

    @property
    def minute(self) -> int:
        return self.minutes % 60

    @classmethod
    def from_datetime(cls, value: datetime) -> "SlotLabel":
        return cls(minutes=value.hour * 60 + value.minute)

    @classmethod
    def parse(cls, text: str) -> "SlotLabel":
        """
        Parse a label in ``H:mm`` form.

        Raises:
            ValueError: If the text is not a valid time-of-day
        """
        hour_text, sep, minute_text = text.strip().partition(":")
        if not sep or not hour_text.isdigit() or not minute_text.isdigit():
            raise ValueError(f"Invalid slot label: '{text}'")

        hour, minute = int(hour_text), int(minute_text)
        if hour > 23 or minute > 59:
            raise ValueError(f"Invalid slot label: '{text}'")

        return cls(minutes=hour * 60 + minute)

    def __str__(self) -> str:
        return f"{self.hour}:{self.minute:02d}"


@dataclass(frozen=True)
class AvailabilityWindow:
    """
    The consecutive calendar dates availability is computed for.

    Covers ``[start, start + days)``.
    """
    start: Date
    days: int = WINDOW_DAYS

    def __post_init__(self):
        if self.days <= 0:
            raise ValueError(f"Window must cover at least one day, got {self.days}")

    @property
    def end(self) -> Date:
        """First date after the window."""
        return add_days(self.start, self.days)

    def dates(self) -> Iterator[Date]:
        """Yield every date of the window in ascending order."""
        for offset in range(self.days):
            yield add_days(self.start, offset)

    def contains(self, day: date) -> bool:
        return self.start <= day_of(day) < self.end


@dataclass
class AvailabilityDay:
    """Bookable slots of one calendar date."""
    date: Date
    slots: List[SlotLabel] = field(default_factory=list)

    def slot_strings(self) -> List[str]:
        return [str(slot) for slot in self.slots]

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "slots": self.slot_strings()}


@dataclass
class EventBatch:
    """Events fetched for one window, partitioned by kind and recurrence."""
    appointments: List[Event] = field(default_factory=list)
    recurring_openings: List[Event] = field(default_factory=list)
    non_recurring_openings: List[Event] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "EventBatch":
        return cls()

    @classmethod
    def from_events(cls, events: Iterable[Event]) -> "EventBatch":
        batch = cls()
        for event in events:
            if event.is_appointment:
                batch.appointments.append(event)
            elif event.weekly_recurring:
                batch.recurring_openings.append(event)
            else:
                batch.non_recurring_openings.append(event)
        return batch

    def __len__(self) -> int:
        return (
            len(self.appointments)
            + len(self.recurring_openings)
            + len(self.non_recurring_openings)
        )
