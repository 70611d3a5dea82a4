"""Minimal markdown indexing for outline notes.

Finds ATX headings and ``-`` bullet lines with their character spans, which
is all the serialization layer needs from a document index. Fenced code
blocks are masked first so their contents are never indexed.
"""

import re
from dataclasses import dataclass, field

from notecal.models.document import Heading, Position
from notecal.serialization.headings import (
    filter_spans_within_range,
    resolve_heading_range,
)


@dataclass
class DocumentIndex:
    """Headings and list item spans of one exact document text.

    Attributes:
        text: The indexed text
        headings: Headings in document order
        list_items: Spans of bullet lines in document order, line breaks
            excluded
    """

    text: str
    headings: list[Heading] = field(default_factory=list)
    list_items: list[Position] = field(default_factory=list)

    def heading_range(self, heading_text: str) -> Position | None:
        """Return the range owned by a heading, up to the end of the text."""
        return resolve_heading_range(
            heading_text, self.headings, document_length=len(self.text)
        )

    def list_items_under(self, heading_text: str) -> list[Position]:
        """Return the list items inside a heading's range."""
        range_ = self.heading_range(heading_text)
        if range_ is None:
            return []
        return filter_spans_within_range(range_, self.list_items)

    def line_position(self, line_number: int) -> Position | None:
        """Return the span of a 1-based line number, without its line break."""
        if line_number < 1:
            return None
        start = 0
        for _ in range(line_number - 1):
            newline = self.text.find("\n", start)
            if newline == -1:
                return None
            start = newline + 1
        end = self.text.find("\n", start)
        if end == -1:
            end = len(self.text)
        if end > start and self.text[end - 1] == "\r":
            end -= 1
        return Position(start=start, end=end)


class MarkdownIndexer:
    """Index headings and bullet lines of a markdown note."""

    HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+([^\r\n]+?)[ \t]*(?=\r?$)", re.MULTILINE)
    LIST_ITEM_PATTERN = re.compile(r"^[ \t]*-[ \t]+[^\r\n]*", re.MULTILINE)
    CODE_BLOCK_PATTERN = re.compile(r"```[\s\S]*?```", re.MULTILINE)

    def _mask_code_blocks(self, text: str) -> str:
        """Blank out fenced code blocks, keeping every offset unchanged."""
        return self.CODE_BLOCK_PATTERN.sub(
            lambda m: re.sub(r"[^\n]", " ", m.group(0)), text
        )

    def index(self, text: str) -> DocumentIndex:
        """Build the index of ``text``.

        Args:
            text: Full markdown document

        Returns:
            DocumentIndex whose positions are valid for ``text`` only
        """
        masked = self._mask_code_blocks(text)

        headings = [
            Heading(
                text=match.group(2).strip(),
                level=len(match.group(1)),
                position=Position(start=match.start(), end=match.end()),
            )
            for match in self.HEADING_PATTERN.finditer(masked)
        ]
        list_items = [
            Position(start=match.start(), end=match.end())
            for match in self.LIST_ITEM_PATTERN.finditer(masked)
        ]
        return DocumentIndex(text=text, headings=headings, list_items=list_items)
