"""Parsing of ``KEY=VALUE`` command line arguments into patch values."""

from collections.abc import Iterable
from typing import Any

from notecal.serialization.attributes import parse_bool

# Values that remove a field (or, for completed, the checkbox)
NULL_WORDS = frozenset({"none", "null"})


def parse_value(raw: str) -> Any:
    """Convert a command line value the way an inline tag value is read.

    ``true``/``false`` become booleans and ``none``/``null`` become None;
    anything else stays a string.
    """
    if raw.lower() in NULL_WORDS:
        return None
    return parse_bool(raw)


def parse_assignments(assignments: Iterable[str]) -> dict[str, Any]:
    """Parse ``KEY=VALUE`` arguments into a dict, later keys winning.

    Raises:
        ValueError: If an argument has no ``=`` or an empty key
    """
    parsed: dict[str, Any] = {}
    for assignment in assignments:
        key, sep, raw = assignment.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"expected KEY=VALUE, got {assignment!r}")
        parsed[key.strip()] = parse_value(raw)
    return parsed
