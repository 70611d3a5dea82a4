"""Document indexing: headings and list item spans of a note."""

from notecal.index.markdown import DocumentIndex, MarkdownIndexer

__all__ = ["DocumentIndex", "MarkdownIndexer"]
