"""Turn outline lines into event records.

A line becomes an event when it carries at least one inline tag and the
merged fields validate as an :data:`~notecal.models.event.EventRecord`.
Anything else is an ordinary note line and is skipped without complaint:
a checklist item that happens to contain ``[see:: below]`` is not an error.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from notecal.config.validator import flatten_pydantic_errors
from notecal.models.document import Position
from notecal.models.event import (
    LocatedEvent,
    RecurringEvent,
    SingleEvent,
    validate_event,
)
from notecal.serialization.attributes import parse_inline_attributes
from notecal.serialization.lines import (
    extract_completion_marker,
    strip_bullet_and_attributes,
)
from notecal.serialization.positions import extract_spans

logger = logging.getLogger(__name__)


def extract_event(
    line: str, inherited_defaults: Mapping[str, Any]
) -> SingleEvent | RecurringEvent | None:
    """Build an event record from a single line.

    Field precedence, lowest first: the title and checkbox state read from
    the line, then ``inherited_defaults``, then the line's own tags.

    Args:
        line: One outline line, without its line break
        inherited_defaults: Fields shared by the enclosing document or section

    Returns:
        The validated event, or None if the line has no tags or does not
        describe a valid event
    """
    attrs = parse_inline_attributes(line)

    # A tag-free line can never be an event
    if not attrs:
        return None

    fields: dict[str, Any] = {
        "title": strip_bullet_and_attributes(line),
        "completed": extract_completion_marker(line),
    }
    fields.update(inherited_defaults)
    fields.update(attrs)

    try:
        return validate_event(fields)
    except PydanticValidationError as exc:
        logger.debug(
            f"Skipping line {line!r}: {'; '.join(flatten_pydantic_errors(exc))}"
        )
        return None


def extract_all_events(
    text: str,
    spans: Sequence[Position],
    inherited_defaults: Mapping[str, Any],
) -> list[LocatedEvent]:
    """Extract events from every span, keeping only lines that are events.

    Results keep the order of ``spans`` and carry the span they came from.
    """
    located: list[LocatedEvent] = []
    for line, position in extract_spans(text, spans):
        event = extract_event(line, inherited_defaults)
        if event is not None:
            located.append(LocatedEvent(event=event, position=position))
    logger.debug(f"Extracted {len(located)} events from {len(spans)} list items")
    return located
