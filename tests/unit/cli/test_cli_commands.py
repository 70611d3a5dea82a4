"""Tests for the notecal CLI commands."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from notecal import __version__
from notecal.cli.main import main
from notecal.cli.output import format_checkbox, format_when, line_number
from notecal.cli.values import parse_assignments, parse_value
from notecal.models.document import Position
from notecal.models.event import RecurringEvent, SingleEvent


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def note(temp_dir: Path, sample_note: str) -> Path:
    path = temp_dir / "plan.md"
    path.write_text(sample_note, encoding="utf-8")
    return path


class TestValues:
    """Tests for KEY=VALUE argument parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("false", False), ("none", None), ("NULL", None), ("x", "x")],
    )
    def test_parse_value(self, raw: str, expected: object) -> None:
        """Test values are coerced like tag values, with null words."""
        assert parse_value(raw) == expected

    def test_parse_assignments(self) -> None:
        """Test assignments become a dict, later keys winning."""
        assert parse_assignments(["a=1", "b=x=y", "a=2"]) == {"a": "2", "b": "x=y"}

    @pytest.mark.parametrize("bad", ["novalue", "=x"])
    def test_bad_assignment(self, bad: str) -> None:
        """Test malformed assignments are rejected."""
        with pytest.raises(ValueError):
            parse_assignments([bad])


class TestOutput:
    """Tests for text rendering helpers."""

    def test_line_number(self) -> None:
        """Test offsets map to 1-based line numbers."""
        assert line_number("a\nb\nc", Position(start=4, end=5)) == 3

    @pytest.mark.parametrize(
        ("completed", "expected"),
        [(None, "   "), (False, "[ ]"), (True, "[x]"), ("/", "[/]")],
    )
    def test_format_checkbox(self, completed: object, expected: str) -> None:
        """Test checkbox rendering for each completion state."""
        assert format_checkbox(completed) == expected  # type: ignore[arg-type]

    def test_format_when(self) -> None:
        """Test date, days and time ranges are described."""
        single = SingleEvent.model_validate(
            {"title": "A", "date": "2024-03-05", "startTime": "09:30", "endTime": "10:00"}
        )
        recurring = RecurringEvent.model_validate(
            {"title": "B", "daysOfWeek": "M,F", "startDate": "2024-01-01"}
        )
        assert format_when(single) == "2024-03-05 09:30-10:00"
        assert format_when(recurring) == "M,F (2024-01-01..)"


class TestMainGroup:
    """Tests for the top level command group."""

    def test_version(self, runner: CliRunner) -> None:
        """Test --version prints the package version."""
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        """Test --help lists every command."""
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("events", "calendars", "set"):
            assert command in result.output


class TestEventsCommand:
    """Tests for 'notecal events'."""

    def test_lists_all_events(self, runner: CliRunner, note: Path) -> None:
        """Test every event of the note is listed with its line number."""
        result = runner.invoke(main, ["events", str(note)])

        assert result.exit_code == 0
        assert "Dentist" in result.output
        assert "Outside" in result.output
        assert "Broken" not in result.output
        assert "    6  [ ] 2024-03-05 09:30-10:15  Dentist" in result.output

    def test_heading_filter(self, runner: CliRunner, note: Path) -> None:
        """Test --heading limits events to one section."""
        result = runner.invoke(main, ["events", str(note), "--heading", "Notes"])

        assert result.exit_code == 0
        assert "Outside" in result.output
        assert "Dentist" not in result.output

    def test_missing_heading(self, runner: CliRunner, note: Path) -> None:
        """Test an unknown heading exits with an error."""
        result = runner.invoke(main, ["events", str(note), "--heading", "Nope"])
        assert result.exit_code == 1

    def test_json_output(self, runner: CliRunner, note: Path) -> None:
        """Test --json prints tag-keyed events with line numbers."""
        result = runner.invoke(main, ["events", str(note), "--heading", "Events", "--json"])

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert [item["event"]["title"] for item in payload] == [
            "Dentist",
            "Send invoices",
            "Standup",
            "Travel",
        ]
        assert payload[0]["line"] == 6
        assert payload[0]["event"]["startTime"] == "09:30"
        assert payload[2]["event"]["daysOfWeek"] == ["M", "W", "F"]

    def test_defaults_option(self, runner: CliRunner, temp_dir: Path) -> None:
        """Test --default supplies inherited fields."""
        path = temp_dir / "2024-03-05.md"
        path.write_text("- Lunch [startTime:: 12:00]\n")

        result = runner.invoke(
            main, ["events", str(path), "--default", "date=2024-03-05", "--json"]
        )

        assert result.exit_code == 0
        assert json.loads(result.output)[0]["event"]["date"] == "2024-03-05"

    def test_bad_default(self, runner: CliRunner, note: Path) -> None:
        """Test a malformed --default is a usage error."""
        result = runner.invoke(main, ["events", str(note), "--default", "oops"])
        assert result.exit_code == 2

    def test_undecodable_note(self, runner: CliRunner, temp_dir: Path) -> None:
        """Test a note that is not UTF-8 exits with an error, not a traceback."""
        path = temp_dir / "latin.md"
        path.write_bytes(b"## Events\n- A \xff [date:: 2024-01-01]\n")

        result = runner.invoke(main, ["events", str(path)])

        assert result.exit_code == 1
        assert "Failed to read" in result.output

    def test_no_events(self, runner: CliRunner, temp_dir: Path) -> None:
        """Test a note without events says so."""
        path = temp_dir / "empty.md"
        path.write_text("# Nothing\n- plain item\n")
        result = runner.invoke(main, ["events", str(path)])
        assert result.exit_code == 0
        assert "No events found" in result.output


class TestSetCommand:
    """Tests for 'notecal set'."""

    def test_rewrites_line(self, runner: CliRunner, note: Path) -> None:
        """Test fields are merged into the line and the note is saved."""
        result = runner.invoke(main, ["set", str(note), "6", "startTime=11:00", "-q"])

        assert result.exit_code == 0
        expected = "- [ ] Dentist [date:: 2024-03-05]  [startTime:: 11:00]  [endTime:: 10:15]"
        assert expected in result.output
        assert expected in note.read_text()

    def test_check_off(self, runner: CliRunner, note: Path) -> None:
        """Test completed=x checks the box."""
        result = runner.invoke(main, ["set", str(note), "6", "completed=x", "-q"])

        assert result.exit_code == 0
        assert "- [x] Dentist [date:: 2024-03-05]" in note.read_text()

    def test_remove_tag(self, runner: CliRunner, note: Path) -> None:
        """Test a none value drops a tag."""
        result = runner.invoke(main, ["set", str(note), "6", "endTime=none", "-q"])

        assert result.exit_code == 0
        assert "- [ ] Dentist [date:: 2024-03-05]  [startTime:: 09:30]\n" in note.read_text()

    def test_dry_run(self, runner: CliRunner, note: Path, sample_note: str) -> None:
        """Test --dry-run prints the new line without saving."""
        result = runner.invoke(
            main, ["set", str(note), "6", "title=Orthodontist", "--dry-run"]
        )

        assert result.exit_code == 0
        assert "- [ ] Orthodontist [date:: 2024-03-05]" in result.output
        assert note.read_text() == sample_note

    def test_suppress(self, runner: CliRunner, note: Path) -> None:
        """Test --suppress keeps a tag off the line."""
        result = runner.invoke(
            main, ["set", str(note), "7", "completed=false", "--suppress", "date", "-q"]
        )

        assert result.exit_code == 0
        assert "- [ ] Send invoices\n" in note.read_text()

    def test_not_a_list_item(self, runner: CliRunner, note: Path, sample_note: str) -> None:
        """Test a non-list line is refused and the note left alone."""
        result = runner.invoke(main, ["set", str(note), "5", "date=2024-01-01"])

        assert result.exit_code == 2
        assert note.read_text() == sample_note

    def test_line_out_of_range(self, runner: CliRunner, note: Path) -> None:
        """Test a line past the end of the note is refused."""
        result = runner.invoke(main, ["set", str(note), "999", "date=2024-01-01"])
        assert result.exit_code == 2

    def test_unwritable_value(self, runner: CliRunner, note: Path, sample_note: str) -> None:
        """Test a value that cannot be written exits with an error."""
        result = runner.invoke(main, ["set", str(note), "6", "note=a]b"])

        assert result.exit_code == 1
        assert note.read_text() == sample_note

    def test_title_with_tag_is_refused(
        self, runner: CliRunner, note: Path, sample_note: str
    ) -> None:
        """Test a title that would read back as a tag is refused."""
        result = runner.invoke(main, ["set", str(note), "6", "title=Call [room:: 4B]"])

        assert result.exit_code == 1
        assert note.read_text() == sample_note


class TestCalendarsCommand:
    """Tests for 'notecal calendars'."""

    def test_lists_configured_sources(
        self, runner: CliRunner, temp_dir: Path, note: Path
    ) -> None:
        """Test every configured source and its events are listed."""
        journal = temp_dir / "journal"
        journal.mkdir()
        (journal / "2024-03-05.md").write_text("## Events\n- Gym [startTime:: 07:00]\n")
        config = temp_dir / "notecal.yaml"
        config.write_text(
            "calendars:\n"
            "  - type: note\n"
            "    path: plan.md\n"
            "  - type: dailynote\n"
            "    directory: journal\n"
        )

        result = runner.invoke(main, ["calendars", "--config", str(config), "-q"])

        assert result.exit_code == 0
        assert f"note::{note} (4 events)" in result.output
        assert f"dailynote::{journal} (1 events)" in result.output
        assert "    2  " in result.output
        assert "Gym" in result.output

    def test_json_output(self, runner: CliRunner, temp_dir: Path, note: Path) -> None:
        """Test --json includes calendar and location of every event."""
        config = temp_dir / "notecal.yaml"
        config.write_text("calendars:\n  - type: note\n    path: plan.md\n    heading: Notes\n")

        result = runner.invoke(main, ["calendars", "--config", str(config), "--json", "-q"])

        assert result.exit_code == 0
        (item,) = json.loads(result.output)
        assert item["calendar"] == f"note::{note}"
        assert item["path"] == str(note)
        assert item["event"]["title"] == "Outside"

    def test_missing_config(self, runner: CliRunner, temp_dir: Path) -> None:
        """Test a missing config file exits with an error."""
        result = runner.invoke(
            main, ["calendars", "--config", str(temp_dir / "missing.yaml")]
        )
        assert result.exit_code == 1

    def test_undecodable_note(self, runner: CliRunner, temp_dir: Path) -> None:
        """Test a source note that is not UTF-8 exits with an error."""
        (temp_dir / "latin.md").write_bytes(b"## Events\n- A \xff [date:: 2024-01-01]\n")
        config = temp_dir / "notecal.yaml"
        config.write_text("calendars:\n  - type: note\n    path: latin.md\n")

        result = runner.invoke(main, ["calendars", "--config", str(config), "-q"])

        assert result.exit_code == 1
        assert "Failed to read" in result.output
