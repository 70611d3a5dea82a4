"""Validation message helpers shared by the config loader and the extractor."""

from pydantic import ValidationError as PydanticValidationError

# Tags of discriminated unions show up as elements of an error loc
UNION_TAGS = frozenset({"single", "recurring", "note", "dailynote"})


def flatten_pydantic_errors(exc: PydanticValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into one message per field.

    Union tags are dropped from field paths so that a missing date reads
    ``Field 'date'`` rather than ``Field 'single.date'``.

    Args:
        exc: Pydantic ValidationError exception

    Returns:
        List of human-readable error messages, one per field error

    Example:
        >>> from notecal.models.event import validate_event
        >>> try:
        ...     validate_event({"title": "Dentist"})
        ... except PydanticValidationError as e:
        ...     flatten_pydantic_errors(e)
        ["Field 'date': Field required"]
    """
    errors: list[str] = []

    for error in exc.errors():
        loc = [str(item) for item in error.get("loc", ()) if str(item) not in UNION_TAGS]
        field_path = ".".join(loc) if loc else "event"

        msg = error.get("msg", "Unknown error")
        error_type = error.get("type", "")

        if error_type in ("value_error", "union_tag_invalid"):
            input_val = error.get("input")
            if isinstance(input_val, dict):
                input_val = input_val.get("type", input_val)
            formatted = f"Field '{field_path}': {msg} (received: {input_val!r})"
        else:
            formatted = f"Field '{field_path}': {msg}"

        errors.append(formatted)

    return errors if errors else ["Validation failed with unknown error"]
