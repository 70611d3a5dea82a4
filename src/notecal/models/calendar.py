"""Calendar source configuration models.

Sources are listed under ``calendars`` in ``notecal.yaml``:

    defaults:
      allDay: true
    calendars:
      - type: note
        path: projects/launch.md
        heading: Milestones
      - type: dailynote
        directory: journal
"""

from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator

from notecal.config.defaults import DEFAULT_COLOR, DEFAULT_HEADING


class SourceConfigBase(BaseModel):
    """Fields shared by every calendar source."""

    model_config = ConfigDict(extra="forbid")

    heading: str = Field(
        DEFAULT_HEADING, description="Heading whose list items hold the events"
    )
    color: str = Field(DEFAULT_COLOR, description="Display color for the calendar")
    defaults: dict[str, Any] = Field(
        default_factory=dict,
        description="Fields every event of this source inherits",
    )

    @field_validator("heading")
    @classmethod
    def validate_heading(cls, v: str) -> str:
        """Validate heading is not blank."""
        if not v.strip():
            raise ValueError("heading must be non-empty")
        return v.strip()


class NoteCalendarConfig(SourceConfigBase):
    """Events kept under one heading of a single note."""

    type: Literal["note"] = Field(default="note", description="Source type")
    path: Path = Field(..., description="Markdown note holding the events")


class DailyNoteCalendarConfig(SourceConfigBase):
    """Events kept in a directory of daily notes named ``YYYY-MM-DD.md``."""

    type: Literal["dailynote"] = Field(default="dailynote", description="Source type")
    directory: Path = Field(..., description="Directory of daily notes")


def _get_source_type(v: Any) -> str:
    """Extract source type from dict or model for discrimination."""
    if isinstance(v, dict):
        source_type: str = v.get("type", "")
        return source_type
    result: str = getattr(v, "type", "")
    return result


CalendarSourceConfig = Annotated[
    Annotated[NoteCalendarConfig, Tag("note")]
    | Annotated[DailyNoteCalendarConfig, Tag("dailynote")],
    Discriminator(_get_source_type),
]


class NoteCalConfig(BaseModel):
    """Top level ``notecal.yaml`` contents."""

    model_config = ConfigDict(extra="forbid")

    defaults: dict[str, Any] = Field(
        default_factory=dict,
        description="Fields every event of every source inherits",
    )
    calendars: list[CalendarSourceConfig] = Field(
        default_factory=list, description="Configured calendar sources"
    )
