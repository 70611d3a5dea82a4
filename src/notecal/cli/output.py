"""Plain text and JSON rendering of events for the CLI."""

import json
from typing import Any

from notecal.models.document import Position
from notecal.models.event import RecurringEvent, SingleEvent


def line_number(text: str, position: Position) -> int:
    """Return the 1-based line number at which ``position`` starts."""
    return text.count("\n", 0, position.start) + 1


def format_checkbox(completed: bool | str | None) -> str:
    if completed is None:
        return "   "
    if completed is False:
        return "[ ]"
    return f"[{completed if isinstance(completed, str) else 'x'}]"


def format_when(event: SingleEvent | RecurringEvent) -> str:
    """Describe when an event happens, e.g. ``2024-03-05 09:30-10:00``."""
    if isinstance(event, SingleEvent):
        when = event.date.isoformat()
    else:
        when = ",".join(event.days_of_week)
        if event.start_date or event.end_date:
            start = event.start_date.isoformat() if event.start_date else ""
            end = event.end_date.isoformat() if event.end_date else ""
            when += f" ({start}..{end})"
    if not event.all_day and event.start_time:
        when += f" {event.start_time}"
        if event.end_time:
            when += f"-{event.end_time}"
    return when


def format_event(event: SingleEvent | RecurringEvent, line: int) -> str:
    """One line summary of an event and the note line it came from."""
    return f"{line:>5}  {format_checkbox(event.completed)} {format_when(event)}  {event.title}"


def event_to_json(event: SingleEvent | RecurringEvent, **extra: Any) -> dict[str, Any]:
    """JSON-ready dict of an event keyed by tag names, plus ``extra`` keys."""
    payload: dict[str, Any] = dict(extra)
    payload["event"] = event.model_dump(mode="json", by_alias=True)
    return payload


def dumps(payload: Any) -> str:
    return json.dumps(payload, indent=2)
