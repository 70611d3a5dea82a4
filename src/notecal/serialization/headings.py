"""Heading ranges and containment filtering."""

from collections.abc import Sequence

from notecal.models.document import Heading, Position


def resolve_heading_range(
    heading_text: str,
    headings: Sequence[Heading],
    document_length: int | None = None,
) -> Position | None:
    """Return the range of text owned by a heading.

    The range starts at the end of the first heading whose text matches and
    ends at the start of the next heading of the same or a higher level
    (a smaller or equal ``level``). Deeper headings in between belong to the
    range.

    Args:
        heading_text: Exact heading text to look for
        headings: Headings in document order
        document_length: Length of the document text. When given, a heading
            with no closing heading owns everything up to the end of the
            document; when omitted, such a heading has no range.

    Returns:
        The owned range, or None if the heading is missing or unbounded
    """
    opening: Heading | None = None
    for heading in headings:
        if opening is None:
            if heading.text == heading_text:
                opening = heading
        elif heading.level <= opening.level:
            return Position(start=opening.position.end, end=heading.position.start)

    if opening is None or document_length is None:
        return None
    return Position(start=opening.position.end, end=document_length)


def filter_spans_within_range(
    range_: Position, spans: Sequence[Position]
) -> list[Position]:
    """Return the spans lying inside ``range_``, in their original order.

    A span must start strictly after the range start, which excludes the
    heading line itself, and end no later than the (exclusive) range end.
    """
    return [
        span
        for span in spans
        if range_.start < span.start and span.end <= range_.end
    ]
