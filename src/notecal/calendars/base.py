"""Calendar source interface.

A calendar source is anything that can list events and write event changes
back to where they are stored. Sources are not related by inheritance: each
implementation satisfies :class:`CalendarSource` structurally and is looked
up in the registry by its ``type``.

Every write is a single read-modify-write of one file. notecal assumes one
writer per file; positions returned by :meth:`CalendarSource.events` are
only valid until the next write.
"""

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from notecal.index.markdown import DocumentIndex
from notecal.lib.errors import CalendarSourceError
from notecal.models.document import Position
from notecal.models.event import EventRecord, RecurringEvent, SingleEvent
from notecal.serialization.attributes import render_value

logger = logging.getLogger(__name__)

ID_SEPARATOR = "::"

# Inferred on read, never written
ALWAYS_SUPPRESSED_KEYS = ("type",)


class EventLocation(BaseModel):
    """Where an event line lives: a file and a span of its text."""

    model_config = ConfigDict(frozen=True)

    path: Path
    position: Position


class SourceEvent(BaseModel):
    """An event read from a calendar source."""

    calendar_id: str
    event: EventRecord
    location: EventLocation


@runtime_checkable
class CalendarSource(Protocol):
    """Capabilities every calendar source provides."""

    @property
    def type(self) -> str:
        """Registry key of the source implementation."""
        ...

    @property
    def id(self) -> str:
        """Identifier, ``{type}::{identifier}``."""
        ...

    @property
    def color(self) -> str:
        """Display color."""
        ...

    def events(self) -> list[SourceEvent]:
        """Read every event of the source."""
        ...

    def add_event(self, event: SingleEvent | RecurringEvent) -> EventLocation:
        """Write a new event and return where it was written."""
        ...

    def modify_event(self, location: EventLocation, patch: Mapping[str, Any]) -> bool:
        """Rewrite the event at ``location``; False if the location is stale."""
        ...

    def delete_event(self, location: EventLocation) -> bool:
        """Remove the event at ``location``; False if the location is stale."""
        ...


def make_id(source_type: str, identifier: str) -> str:
    """Build a calendar id from its type and a source specific identifier."""
    return f"{source_type}{ID_SEPARATOR}{identifier}"


def read_note(path: Path, source_type: str) -> str:
    """Read a note, treating a missing file as empty.

    Raises:
        CalendarSourceError: If the file exists but cannot be read
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug(f"Note {path} does not exist yet")
        return ""
    except (OSError, UnicodeDecodeError) as exc:
        raise CalendarSourceError(source_type, f"Failed to read {path}: {exc}") from exc


def write_note(path: Path, source_type: str, text: str) -> None:
    """Write a note, creating its directory if needed.

    Raises:
        CalendarSourceError: If the note cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise CalendarSourceError(source_type, f"Failed to write {path}: {exc}") from exc
    logger.info(f"Updated {path}")


def process_note(
    path: Path, source_type: str, process: Callable[[str], str | None]
) -> bool:
    """Read a note, transform its text and write it back.

    Nothing is written when ``process`` returns None.

    Returns:
        True if the note was rewritten

    Raises:
        CalendarSourceError: If the note cannot be read or written
    """
    new_text = process(read_note(path, source_type))
    if new_text is None:
        return False
    write_note(path, source_type, new_text)
    return True


def redundant_keys(patch: Mapping[str, Any], defaults: Mapping[str, Any]) -> list[str]:
    """Return the patch keys that need not be written as tags.

    These are the keys inferred on read plus those whose value the line
    would inherit anyway.
    """
    keys = list(ALWAYS_SUPPRESSED_KEYS)
    for key, default in defaults.items():
        value = patch.get(key)
        if value is not None and render_value(value) == render_value(default):
            keys.append(key)
    return keys


def insert_list_item(
    index: DocumentIndex, heading: str, line: str
) -> tuple[str, Position]:
    """Insert a list line at the end of a heading's section.

    The line goes after the last list item of the section, or right below
    the heading when the section has none. A missing heading is appended to
    the end of the document first.
    New lines use the newline style the document already has.

    Returns:
        The new document text and the span of the inserted line in it
    """
    text = index.text
    newline = "\r\n" if "\r\n" in text else "\n"
    range_ = index.heading_range(heading)
    if range_ is None:
        prefix = "" if not text or text.endswith("\n") else newline
        if text:
            prefix += newline
        head = f"{text}{prefix}## {heading}{newline}"
        return f"{head}{line}{newline}", Position(start=len(head), end=len(head) + len(line))

    items = index.list_items_under(heading)
    anchor = items[-1].end if items else range_.start
    start = anchor + len(newline)
    new_text = text[:anchor] + newline + line + text[anchor:]
    return new_text, Position(start=start, end=start + len(line))
