"""Bullet and checklist line syntax."""

import re

from notecal.serialization.attributes import strip_inline_attributes

# Group 1: indentation, group 3: checkbox character
LIST_PATTERN = re.compile(r"^(\s*)-\s+(\[(.)\]\s+)?")
CHECKBOX_PATTERN = re.compile(r"^\s*-\s+\[(.)\]\s+")


def is_checklist_line(line: str) -> bool:
    """Return True for a bulleted line, with or without a checkbox."""
    return LIST_PATTERN.match(line) is not None


def extract_completion_marker(line: str) -> str | bool | None:
    """Return the checkbox state of a line.

    Returns:
        False for an empty box ``[ ]``, the box character for any other
        marker (``x``, ``/``, ``-``...), or None when the line has no checkbox
    """
    match = CHECKBOX_PATTERN.match(line)
    if not match:
        return None
    marker = match.group(1)
    return False if marker == " " else marker


def strip_bullet_and_attributes(line: str) -> str:
    """Return the line's title: no bullet, no checkbox, no inline tags."""
    return strip_inline_attributes(LIST_PATTERN.sub("", line, count=1)).strip()
