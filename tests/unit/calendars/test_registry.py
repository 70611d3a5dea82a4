"""Tests for the calendar source registry."""

from pathlib import Path

import pytest

from notecal.calendars import registry
from notecal.calendars.daily_note import DailyNoteCalendar
from notecal.calendars.note import NoteCalendar
from notecal.calendars.registry import (
    available_source_types,
    create_source,
    create_sources,
    register_source,
)
from notecal.lib.errors import CalendarSourceError
from notecal.models.calendar import (
    DailyNoteCalendarConfig,
    NoteCalConfig,
    NoteCalendarConfig,
)


class TestRegistry:
    """Tests for source registration and creation."""

    def test_builtin_types(self) -> None:
        """Test the built-in source types are registered."""
        assert available_source_types() == ["dailynote", "note"]

    def test_create_source_by_type(self) -> None:
        """Test configs map to their implementation."""
        note = create_source(NoteCalendarConfig(path=Path("plan.md")))
        daily = create_source(DailyNoteCalendarConfig(directory=Path("journal")))
        assert isinstance(note, NoteCalendar)
        assert isinstance(daily, DailyNoteCalendar)

    def test_shared_defaults_are_passed_on(self) -> None:
        """Test sources receive the top level defaults under their own."""
        config = NoteCalConfig.model_validate(
            {
                "defaults": {"allDay": True, "room": "1A"},
                "calendars": [
                    {"type": "note", "path": "plan.md", "defaults": {"room": "4B"}}
                ],
            }
        )
        (source,) = create_sources(config)
        assert isinstance(source, NoteCalendar)
        assert source.defaults == {"allDay": True, "room": "4B"}

    def test_duplicate_registration_rejected(self) -> None:
        """Test a type cannot be registered twice."""
        with pytest.raises(CalendarSourceError):
            register_source("note", NoteCalendar)

    def test_unknown_type(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a config whose type has no implementation is rejected."""
        monkeypatch.delitem(registry._FACTORIES, "dailynote")
        with pytest.raises(CalendarSourceError) as exc_info:
            create_source(DailyNoteCalendarConfig(directory=Path("journal")))
        assert exc_info.value.source_type == "dailynote"

    def test_custom_source_type(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test new source types can be plugged in."""
        monkeypatch.setattr(registry, "_FACTORIES", dict(registry._FACTORIES))
        register_source("mirror", NoteCalendar)
        assert "mirror" in available_source_types()
