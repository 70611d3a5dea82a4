"""notecal - Keep calendar events in plain-text outline notes.

notecal reads events written as tagged list items in markdown notes and
writes event changes back into the same lines, leaving the rest of the note
untouched.

    ## Events
    - [ ] Dentist [date:: 2024-03-05]  [startTime:: 09:30]
    - Standup [daysOfWeek:: M,W,F]  [startTime:: 10:00]

Main features:
- Inline ``[name:: value]`` tag parsing and generation
- Validated single and weekly recurring event records
- Line-local, offset-precise rewriting of single list items
- Heading scoped extraction
- Note and daily-note calendar sources configured in YAML
"""

from notecal.lib.errors import (
    CalendarSourceError,
    ConfigError,
    InlineAttributeError,
    NoteCalError,
)
from notecal.models.event import RecurringEvent, SingleEvent
from notecal.serialization.events import extract_all_events, extract_event
from notecal.serialization.rewriter import rewrite_list_item

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CalendarSourceError",
    "ConfigError",
    "InlineAttributeError",
    "NoteCalError",
    "RecurringEvent",
    "SingleEvent",
    "extract_all_events",
    "extract_event",
    "rewrite_list_item",
]
