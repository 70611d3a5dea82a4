"""Rewrite a single list line with new event fields.

The rewrite is line-local: only the addressed span changes, and everything
before and after it is copied through byte for byte.
"""

import logging
from collections.abc import Collection, Mapping
from typing import Any

from notecal.lib.errors import InlineAttributeError
from notecal.models.document import Position
from notecal.models.event import EventBase
from notecal.serialization.attributes import (
    generate_inline_attributes,
    parse_inline_attributes,
)
from notecal.serialization.lines import (
    CHECKBOX_PATTERN,
    LIST_PATTERN,
    strip_bullet_and_attributes,
)
from notecal.serialization.positions import replace_at_position

logger = logging.getLogger(__name__)

# Not written when false; absence already reads back as the default
DEFAULT_FALSE_KEYS = ("allDay",)

_UNSET = object()


def render_checkbox(completed: Any, old_marker: str | None) -> str | None:
    """Return the checkbox text for a line, or None for a plain bullet.

    Args:
        completed: The patch's ``completed`` value, or ``_UNSET`` when the
            patch leaves it out
        old_marker: Checkbox character currently on the line, if any
    """
    if completed is _UNSET:
        return f"[{old_marker}]" if old_marker is not None else None
    if completed is None:
        return None
    if completed is False or completed == " ":
        return "[ ]"
    if isinstance(completed, str) and len(completed) == 1 and completed.strip():
        return f"[{completed}]"
    return "[x]" if completed else "[ ]"


def _compose_line(
    indentation: str, checkbox: str | None, title: str, attrs: Mapping[str, Any]
) -> str:
    if "\n" in title or "\r" in title:
        raise InlineAttributeError("title", "titles cannot span lines")
    if parse_inline_attributes(title):
        raise InlineAttributeError("title", f"title {title!r} contains an inline attribute")
    rendered = generate_inline_attributes(attrs)
    pieces = [piece for piece in (checkbox, title, rendered) if piece]
    line = f"{indentation}- " + " ".join(pieces)
    # the title must read back unchanged, e.g. not be taken for a checkbox
    if title.strip() and strip_bullet_and_attributes(line) != title.strip():
        raise InlineAttributeError("title", f"title {title!r} would not read back unchanged")
    return line


def _writable_attrs(
    fields: dict[str, Any], keys_to_suppress: Collection[str]
) -> dict[str, Any]:
    for key in keys_to_suppress:
        fields.pop(key, None)
    attrs = {key: value for key, value in fields.items() if value is not None}
    for key in DEFAULT_FALSE_KEYS:
        if attrs.get(key) is False:
            del attrs[key]
    return attrs


def _to_patch(patch: Mapping[str, Any] | EventBase) -> dict[str, Any]:
    if isinstance(patch, EventBase):
        return patch.to_patch()
    return dict(patch)


def rewrite_list_item(
    text: str,
    position: Position,
    patch: Mapping[str, Any] | EventBase,
    keys_to_suppress: Collection[str] = (),
) -> str | None:
    """Merge a patch into the list line at ``position``.

    The new line keeps the old indentation. The title and checkbox fall
    back to the line's current ones when the patch leaves them out; an
    explicit ``completed: None`` removes the checkbox. All other tags come
    from the patch only, minus ``keys_to_suppress``, null values and a false
    ``allDay``.

    Args:
        text: Full document text
        position: Span of the line to rewrite, computed from ``text``
        patch: Fields keyed by tag name, or an event record
        keys_to_suppress: Tag names never to write, e.g. fields the
            document already implies

    Returns:
        The full new document text, or None if ``position`` does not address
        a list line (typically a stale position)

    Raises:
        InlineAttributeError: If the title or a value cannot be written safely
    """
    line = text[position.start : position.end]
    list_match = LIST_PATTERN.match(line)
    if not list_match or "\n" in line:
        logger.warning(
            f"Tried to modify a list item at {position.start}-{position.end} "
            f"that is not a list item: {line!r}"
        )
        return None

    fields = _to_patch(patch)
    indentation = list_match.group(1)

    old_title = strip_bullet_and_attributes(line)
    checkbox_match = CHECKBOX_PATTERN.match(line)
    old_marker = checkbox_match.group(1) if checkbox_match else None

    checkbox = render_checkbox(fields.pop("completed", _UNSET), old_marker)
    title = fields.pop("title", None) or old_title
    attrs = _writable_attrs(fields, keys_to_suppress)

    new_line = _compose_line(indentation, checkbox, title, attrs)
    return replace_at_position(text, position, new_line)


def render_list_item(
    patch: Mapping[str, Any] | EventBase,
    keys_to_suppress: Collection[str] = (),
    indentation: str = "",
) -> str:
    """Render a new list line for an event that is not in the document yet.

    Follows the same rules as :func:`rewrite_list_item`; a patch without
    ``completed`` gives a plain bullet.

    Raises:
        InlineAttributeError: If the patch has no title, or the title or a
            value cannot be written safely
    """
    fields = _to_patch(patch)
    title = fields.pop("title", None)
    if not title:
        raise InlineAttributeError("title", "a new list item needs a title")
    checkbox = render_checkbox(fields.pop("completed", None), None)
    attrs = _writable_attrs(fields, keys_to_suppress)
    return _compose_line(indentation, checkbox, title, attrs)


def remove_list_item(text: str, position: Position) -> str | None:
    """Remove the list line at ``position`` together with its line break.

    Returns:
        The full new document text, or None if ``position`` does not address
        a list line
    """
    line = text[position.start : position.end]
    if not LIST_PATTERN.match(line) or "\n" in line:
        logger.warning(
            f"Tried to remove a list item at {position.start}-{position.end} "
            f"that is not a list item: {line!r}"
        )
        return None

    end = position.end
    if text.startswith("\r\n", end):
        end += 2
    elif text.startswith("\n", end):
        end += 1
    elif position.start > 0 and text[position.start - 1] == "\n":
        # Last line of the document: drop the preceding line break instead
        start = position.start - 1
        if start > 0 and text[start - 1] == "\r":
            start -= 1
        return text[:start] + text[end:]
    return text[: position.start] + text[end:]
