"""Calendar backed by a directory of daily notes.

Each note is named after its day (``2024-03-05.md``) and every event listed
under the configured heading inherits that day as its ``date``. Changing an
event's date moves its line to the note of the new day.
"""

import datetime
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from notecal.calendars.base import (
    EventLocation,
    SourceEvent,
    insert_list_item,
    make_id,
    process_note,
    read_note,
    redundant_keys,
    write_note,
)
from notecal.config.defaults import DAILY_NOTE_SUFFIX
from notecal.config.validator import flatten_pydantic_errors
from notecal.index.markdown import MarkdownIndexer
from notecal.models.calendar import DailyNoteCalendarConfig
from notecal.models.event import RecurringEvent, SingleEvent, validate_event
from notecal.serialization.attributes import render_value
from notecal.serialization.events import extract_all_events, extract_event
from notecal.serialization.rewriter import (
    remove_list_item,
    render_list_item,
    rewrite_list_item,
)

logger = logging.getLogger(__name__)


def note_date(path: Path) -> datetime.date | None:
    """Return the day a daily note is named after, or None."""
    if path.suffix != DAILY_NOTE_SUFFIX:
        return None
    try:
        return datetime.date.fromisoformat(path.stem)
    except ValueError:
        return None


class DailyNoteCalendar:
    """Events listed under one heading of each daily note."""

    def __init__(
        self,
        config: DailyNoteCalendarConfig,
        shared_defaults: Mapping[str, Any] | None = None,
        indexer: MarkdownIndexer | None = None,
    ) -> None:
        """Create a daily note calendar.

        Args:
            config: Source configuration
            shared_defaults: Fields inherited by every source
            indexer: Markdown indexer (a default one is created if omitted)
        """
        self.config = config
        self.indexer = indexer or MarkdownIndexer()
        self.defaults: dict[str, Any] = {**(shared_defaults or {}), **config.defaults}

    @property
    def type(self) -> str:
        return "dailynote"

    @property
    def id(self) -> str:
        return make_id(self.type, str(self.config.directory))

    @property
    def color(self) -> str:
        return self.config.color

    def note_path(self, day: datetime.date) -> Path:
        """Return the path of the note for ``day``."""
        return self.config.directory / f"{day.isoformat()}{DAILY_NOTE_SUFFIX}"

    def notes(self) -> list[tuple[datetime.date, Path]]:
        """Return the daily notes of the directory, oldest first."""
        if not self.config.directory.is_dir():
            logger.warning(f"Daily note directory {self.config.directory} not found")
            return []
        dated = []
        for path in self.config.directory.iterdir():
            day = note_date(path)
            if day is not None and path.is_file():
                dated.append((day, path))
        return sorted(dated)

    def note_defaults(self, day: datetime.date) -> dict[str, Any]:
        """Return the inherited fields of events in the note for ``day``."""
        return {**self.defaults, "date": day.isoformat()}

    def events(self) -> list[SourceEvent]:
        """Read the events of every daily note."""
        events: list[SourceEvent] = []
        for day, path in self.notes():
            index = self.indexer.index(read_note(path, self.type))
            items = index.list_items_under(self.config.heading)
            for located in extract_all_events(index.text, items, self.note_defaults(day)):
                events.append(
                    SourceEvent(
                        calendar_id=self.id,
                        event=located.event,
                        location=EventLocation(path=path, position=located.position),
                    )
                )
        return events

    def add_event(self, event: SingleEvent | RecurringEvent) -> EventLocation:
        """Add an event to the note of its day.

        Recurring events go into the note of their start date, or today's
        note when they have none.
        """
        if isinstance(event, SingleEvent):
            day = event.date
        else:
            day = event.start_date or datetime.date.today()

        patch = event.to_patch()
        line = render_list_item(patch, redundant_keys(patch, self.note_defaults(day)))
        path = self.note_path(day)
        new_text, position = insert_list_item(
            self.indexer.index(read_note(path, self.type)), self.config.heading, line
        )
        write_note(path, self.type, new_text)
        return EventLocation(path=path, position=position)

    def modify_event(self, location: EventLocation, patch: Mapping[str, Any]) -> bool:
        """Rewrite the event at ``location``, moving it if its date changes."""
        day = note_date(location.path)
        if day is None:
            logger.warning(f"{location.path} is not a daily note")
            return False

        new_date = patch.get("date")
        if new_date is not None and render_value(new_date) != day.isoformat():
            return self._move_event(location, day, patch)

        suppressed = redundant_keys(patch, self.note_defaults(day))
        return process_note(
            location.path,
            self.type,
            lambda text: rewrite_list_item(text, location.position, patch, suppressed),
        )

    def _move_event(
        self, location: EventLocation, day: datetime.date, patch: Mapping[str, Any]
    ) -> bool:
        """Move an event to the note of the date in ``patch``."""
        text = read_note(location.path, self.type)
        line = text[location.position.start : location.position.end]
        current = extract_event(line, self.note_defaults(day))
        if current is None:
            logger.warning(
                f"Tried to move an event at {location.position.start}-"
                f"{location.position.end} of {location.path} that is not an event"
            )
            return False

        try:
            event = validate_event({**current.to_patch(), **patch})
        except PydanticValidationError as exc:
            logger.warning(
                f"Cannot move event to {patch.get('date')}: "
                f"{'; '.join(flatten_pydantic_errors(exc))}"
            )
            return False

        if not self.delete_event(location):
            return False
        self.add_event(event)
        return True

    def delete_event(self, location: EventLocation) -> bool:
        """Remove the event line at ``location``."""
        return process_note(
            location.path,
            self.type,
            lambda text: remove_list_item(text, location.position),
        )
