"""
Adapters layer - Event storage integrations.
"""

from .json_event_source import EventRecord, JsonEventSource, parse_event_record

__all__ = ["EventRecord", "JsonEventSource", "parse_event_record"]
