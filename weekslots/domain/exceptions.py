"""
Domain-specific exception hierarchy for the weekslots application.
"""


class WeekslotsError(Exception):
    """Base class for all application-level errors."""


class EventSourceError(WeekslotsError):
    """Raised when event records cannot be fetched or parsed."""


class InvalidEventError(WeekslotsError):
    """Raised when a single event record cannot be turned into an Event."""
