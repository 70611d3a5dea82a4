"""Text to event serialization for outline notes.

Main components:
- extract_spans: Resolve positions to line text
- parse_inline_attributes / generate_inline_attributes: ``[name:: value]`` tags
- is_checklist_line / extract_completion_marker: Bullet and checkbox syntax
- resolve_heading_range / filter_spans_within_range: Section containment
- extract_event / extract_all_events: Lines to event records
- rewrite_list_item: Event patches back into a line
"""

from notecal.serialization.attributes import (
    generate_inline_attributes,
    parse_inline_attributes,
)
from notecal.serialization.events import extract_all_events, extract_event
from notecal.serialization.headings import (
    filter_spans_within_range,
    resolve_heading_range,
)
from notecal.serialization.lines import (
    extract_completion_marker,
    is_checklist_line,
    strip_bullet_and_attributes,
)
from notecal.serialization.positions import extract_spans, replace_at_position
from notecal.serialization.rewriter import (
    remove_list_item,
    render_list_item,
    rewrite_list_item,
)

__all__ = [
    "extract_all_events",
    "extract_completion_marker",
    "extract_event",
    "extract_spans",
    "filter_spans_within_range",
    "generate_inline_attributes",
    "is_checklist_line",
    "parse_inline_attributes",
    "remove_list_item",
    "render_list_item",
    "replace_at_position",
    "resolve_heading_range",
    "rewrite_list_item",
    "strip_bullet_and_attributes",
]
