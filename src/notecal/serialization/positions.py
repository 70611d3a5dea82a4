"""Resolve document positions to text and splice text back in."""

from collections.abc import Sequence

from notecal.models.document import Position


def extract_spans(text: str, positions: Sequence[Position]) -> list[tuple[str, Position]]:
    """Return the substring covered by each position, in input order.

    Duplicate and overlapping positions are returned as given. Offsets are
    assumed to lie within ``text``.
    """
    return [(text[pos.start : pos.end], pos) for pos in positions]


def replace_at_position(text: str, position: Position, replacement: str) -> str:
    """Return ``text`` with the span at ``position`` replaced."""
    return text[: position.start] + replacement + text[position.end :]
