"""Calendar sources: where events are read from and written back to.

Sources implement the CalendarSource protocol and are created from their
configuration through the registry:

    >>> from notecal.calendars import create_sources
    >>> sources = create_sources(config)
    >>> events = [event for source in sources for event in source.events()]
"""

from notecal.calendars.base import (
    CalendarSource,
    EventLocation,
    SourceEvent,
)
from notecal.calendars.daily_note import DailyNoteCalendar
from notecal.calendars.note import NoteCalendar
from notecal.calendars.registry import (
    available_source_types,
    create_source,
    create_sources,
    register_source,
)

__all__ = [
    "CalendarSource",
    "DailyNoteCalendar",
    "EventLocation",
    "NoteCalendar",
    "SourceEvent",
    "available_source_types",
    "create_source",
    "create_sources",
    "register_source",
]
