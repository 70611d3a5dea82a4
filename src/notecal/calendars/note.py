"""Calendar backed by one heading of a single note."""

import logging
from collections.abc import Mapping
from typing import Any

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
from notecal.index.markdown import MarkdownIndexer
from notecal.models.calendar import NoteCalendarConfig
from notecal.models.event import RecurringEvent, SingleEvent
from notecal.serialization.events import extract_all_events
from notecal.serialization.rewriter import (
    remove_list_item,
    render_list_item,
    rewrite_list_item,
)

logger = logging.getLogger(__name__)


class NoteCalendar:
    """Events listed under one heading of a markdown note.

    Example note:

        # Launch
        ## Milestones
        - [ ] Beta [date:: 2024-05-01]
        - [x] Kickoff [date:: 2024-03-01]  [startTime:: 10:00]
    """

    def __init__(
        self,
        config: NoteCalendarConfig,
        shared_defaults: Mapping[str, Any] | None = None,
        indexer: MarkdownIndexer | None = None,
    ) -> None:
        """Create a note calendar.

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
        return "note"

    @property
    def id(self) -> str:
        return make_id(self.type, str(self.config.path))

    @property
    def color(self) -> str:
        return self.config.color

    def events(self) -> list[SourceEvent]:
        """Read the events under the configured heading."""
        path = self.config.path
        index = self.indexer.index(read_note(path, self.type))
        items = index.list_items_under(self.config.heading)
        if not items and index.heading_range(self.config.heading) is None:
            logger.debug(f"No '{self.config.heading}' heading in {path}")

        return [
            SourceEvent(
                calendar_id=self.id,
                event=located.event,
                location=EventLocation(path=path, position=located.position),
            )
            for located in extract_all_events(index.text, items, self.defaults)
        ]

    def add_event(self, event: SingleEvent | RecurringEvent) -> EventLocation:
        """Append an event to the end of the configured heading's section."""
        patch = event.to_patch()
        line = render_list_item(patch, redundant_keys(patch, self.defaults))
        path = self.config.path
        text = read_note(path, self.type)
        new_text, position = insert_list_item(
            self.indexer.index(text), self.config.heading, line
        )
        write_note(path, self.type, new_text)
        return EventLocation(path=path, position=position)

    def modify_event(self, location: EventLocation, patch: Mapping[str, Any]) -> bool:
        """Rewrite the event line at ``location`` with ``patch``."""
        suppressed = redundant_keys(patch, self.defaults)
        return process_note(
            location.path,
            self.type,
            lambda text: rewrite_list_item(text, location.position, patch, suppressed),
        )

    def delete_event(self, location: EventLocation) -> bool:
        """Remove the event line at ``location``."""
        return process_note(
            location.path,
            self.type,
            lambda text: remove_list_item(text, location.position),
        )
