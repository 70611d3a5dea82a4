"""Event record models.

An event record is what a single outline line turns into once its inline
tags have been parsed and merged with inherited defaults. Two variants exist,
discriminated by ``type``:

- SingleEvent: happens on one ``date``
- RecurringEvent: repeats on ``daysOfWeek``, optionally bounded by
  ``startDate``/``endDate``

Attribute names are snake_case; the camelCase aliases are the inline tag
names. Fields outside the schema are kept as extras so that rewriting a line
never loses a tag notecal does not understand.
"""

import datetime
import re
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_validator,
    model_validator,
)

from notecal.models.document import Position

# Day codes, Sunday first: U=Sunday, R=Thursday
DAY_CODES: tuple[str, ...] = ("U", "M", "T", "W", "R", "F", "S")

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def normalize_time(value: str) -> str:
    """Normalize a clock time to ``HH:MM``.

    Accepts ``H:MM``, ``HH:MM`` and ``HH:MM:SS`` (seconds are dropped).

    Raises:
        ValueError: If the value is not a valid 24 hour time
    """
    match = TIME_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"'{value}' is not a time in HH:MM format")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"'{value}' is out of range for a time of day")
    return f"{hours:02d}:{minutes:02d}"


class EventBase(BaseModel):
    """Fields shared by every event variant."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: str = Field(..., description="Line text without bullet, checkbox or tags")
    completed: bool | str | None = Field(
        None,
        description=(
            "Checkbox state: None for a plain bullet, False for unchecked, "
            "otherwise the checkbox character"
        ),
    )
    start_time: str | None = Field(None, alias="startTime")
    end_time: str | None = Field(None, alias="endTime")
    all_day: bool | None = Field(
        None,
        alias="allDay",
        description="Inferred from start_time when not given",
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate title is not blank."""
        if not v.strip():
            raise ValueError("title must be non-empty")
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str | None) -> str | None:
        """Normalize times to HH:MM."""
        if v is None:
            return v
        return normalize_time(v)

    @model_validator(mode="after")
    def check_time_range(self) -> "EventBase":
        """Infer all_day and check the time fields agree with it."""
        if self.all_day is None:
            self.all_day = self.start_time is None
        if self.all_day is False and self.start_time is None:
            raise ValueError("startTime is required when allDay is false")
        if self.end_time is not None and self.start_time is None:
            raise ValueError("endTime requires startTime")
        return self

    def to_patch(self) -> dict[str, Any]:
        """Return the record as a patch keyed by inline tag names."""
        return self.model_dump(by_alias=True)


class SingleEvent(EventBase):
    """An event that happens once, on a given date."""

    type: Literal["single"] = Field(default="single", description="Event variant")
    date: datetime.date = Field(..., description="Day of the event")


class RecurringEvent(EventBase):
    """An event repeating weekly on a set of days."""

    type: Literal["recurring"] = Field(default="recurring", description="Event variant")
    days_of_week: list[str] = Field(..., alias="daysOfWeek")
    start_date: datetime.date | None = Field(None, alias="startDate")
    end_date: datetime.date | None = Field(None, alias="endDate")

    @field_validator("days_of_week", mode="before")
    @classmethod
    def split_days(cls, v: Any) -> Any:
        """Accept the comma separated form used inside inline tags."""
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @field_validator("days_of_week")
    @classmethod
    def validate_days(cls, v: list[str]) -> list[str]:
        """Validate day codes and drop repeats."""
        days: list[str] = []
        for day in v:
            code = day.upper()
            if code not in DAY_CODES:
                raise ValueError(
                    f"'{day}' is not a day code (expected one of {', '.join(DAY_CODES)})"
                )
            if code not in days:
                days.append(code)
        if not days:
            raise ValueError("daysOfWeek must name at least one day")
        return days

    @model_validator(mode="after")
    def check_date_range(self) -> "RecurringEvent":
        """Validate that the recurrence does not end before it starts."""
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


def _get_event_type(v: Any) -> str:
    """Extract event type from dict or model for discrimination.

    Untyped input is recurring when it names days of the week, single
    otherwise.
    """
    if isinstance(v, dict):
        event_type = v.get("type")
        if event_type is None:
            has_days = "daysOfWeek" in v or "days_of_week" in v
            return "recurring" if has_days else "single"
        return str(event_type)
    result: str = getattr(v, "type", "")
    return result


EventRecord = Annotated[
    Annotated[SingleEvent, Tag("single")] | Annotated[RecurringEvent, Tag("recurring")],
    Discriminator(_get_event_type),
]

_event_adapter: TypeAdapter[EventRecord] = TypeAdapter(EventRecord)


def validate_event(data: dict[str, Any]) -> SingleEvent | RecurringEvent:
    """Validate merged line fields into an event record.

    Raises:
        pydantic.ValidationError: If the fields do not form a valid event
    """
    return _event_adapter.validate_python(data)


class LocatedEvent(BaseModel):
    """An extracted event paired with the span of the line it came from."""

    event: EventRecord
    position: Position
