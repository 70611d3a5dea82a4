"""Inline ``[name:: value]`` attributes.

Inline attributes turn a single outline line into a small key/value store:

    - [ ] Dentist [date:: 2024-03-05]  [startTime:: 09:30]

The grammar has no escape sequences. A value runs up to the first ``]``,
which is why :func:`generate_inline_attributes` refuses values that could
not be read back unchanged.
"""

import datetime
import re
from collections.abc import Mapping
from typing import Any

from notecal.lib.errors import InlineAttributeError

FIELD_PATTERN = re.compile(r"\[([^\]]+):: ?([^\]]+)\]")

# Separator between rendered tags
TAG_SEPARATOR = "  "

InlineAttributes = dict[str, str | bool]


def parse_bool(value: str) -> str | bool:
    """Convert the literal words ``true``/``false``; leave anything else."""
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def parse_inline_attributes(line: str) -> InlineAttributes:
    """Extract every inline attribute from a line.

    Tags are read left to right; a repeated key keeps its last value. Only
    ``true``/``false`` are coerced, numbers stay strings.

    Example:
        >>> parse_inline_attributes("[foo:: true][bar:: 3]")
        {'foo': True, 'bar': '3'}
    """
    return {m.group(1): parse_bool(m.group(2)) for m in FIELD_PATTERN.finditer(line)}


def strip_inline_attributes(line: str) -> str:
    """Remove every inline attribute from a line, leaving the rest untouched."""
    return FIELD_PATTERN.sub("", line)


def render_value(value: Any) -> str:
    """Render a Python value the way it should appear inside a tag."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ",".join(render_value(item) for item in value)
    return str(value)


def _check_key(key: str) -> None:
    if not key or not key.strip():
        raise InlineAttributeError(key, "attribute names must be non-empty")
    if "]" in key or "[" in key or "::" in key:
        raise InlineAttributeError(key, "attribute names cannot contain '[', ']' or '::'")
    if "\n" in key or "\r" in key:
        raise InlineAttributeError(key, "attribute names cannot span lines")


def _check_value(key: str, rendered: str) -> None:
    if not rendered.strip():
        raise InlineAttributeError(key, "values must be non-empty")
    if "::" in rendered:
        raise InlineAttributeError(key, f"value {rendered!r} contains '::'")
    if "]" in rendered:
        raise InlineAttributeError(key, f"value {rendered!r} contains ']'")
    if "\n" in rendered or "\r" in rendered:
        raise InlineAttributeError(key, f"value {rendered!r} contains a line break")


def generate_inline_attributes(attrs: Mapping[str, Any]) -> str:
    """Render a mapping as inline tags, in the mapping's iteration order.

    Booleans render as ``true``/``false``, lists as comma separated values
    and dates in ISO form.

    Raises:
        InlineAttributeError: If a key or value would not parse back as written
    """
    tags: list[str] = []
    for key, value in attrs.items():
        _check_key(key)
        rendered = render_value(value)
        _check_value(key, rendered)
        tags.append(f"[{key}:: {rendered}]")
    return TAG_SEPARATOR.join(tags)
