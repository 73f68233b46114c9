"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability_calculator import AvailabilityCalculator, DayAggregator
from .models import AvailabilityDay, AvailabilityWindow, Event, EventBatch, EventKind, SlotLabel
from .recurrence import project_recurring
from .slot_grid import expand_interval

__all__ = [
    "AvailabilityCalculator",
    "AvailabilityDay",
    "AvailabilityWindow",
    "DayAggregator",
    "Event",
    "EventBatch",
    "EventKind",
    "SlotLabel",
    "expand_interval",
    "project_recurring",
]
