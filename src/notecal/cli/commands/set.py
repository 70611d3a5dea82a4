"""CLI command rewriting one list line of a note.

Implements the 'notecal set' command.
"""

import sys
from pathlib import Path

import click

from notecal.cli.values import parse_assignments
from notecal.calendars.base import read_note, write_note
from notecal.index.markdown import MarkdownIndexer
from notecal.lib.errors import NoteCalError
from notecal.lib.logging_config import get_logger, setup_logging
from notecal.serialization.attributes import parse_inline_attributes
from notecal.serialization.rewriter import rewrite_list_item

logger = get_logger(__name__)


@click.command(name="set")
@click.argument("note", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("line", type=click.IntRange(min=1))
@click.argument("assignments", nargs=-1, required=True, metavar="KEY=VALUE...")
@click.option(
    "--suppress",
    multiple=True,
    metavar="KEY",
    help="Tag never to write on the line (repeatable)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the rewritten line instead of saving the note",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
def set_cmd(
    note: Path,
    line: int,
    assignments: tuple[str, ...],
    suppress: tuple[str, ...],
    dry_run: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Rewrite list item LINE of NOTE with the given fields.

    The given fields are merged over the tags already on the line; a
    value of none removes a tag. The title and checkbox are kept unless
    given. Use completed=x, completed=false or completed=none to check,
    uncheck or remove the checkbox.

    \b
    EXAMPLES:

        Reschedule an event:
            notecal set journal.md 12 date=2024-03-06 startTime=09:30

        Check it off:
            notecal set journal.md 12 completed=x
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        patch = parse_assignments(assignments)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="KEY=VALUE") from exc

    try:
        text = read_note(note, "note")
    except NoteCalError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    position = MarkdownIndexer().index(text).line_position(line)
    if position is None:
        click.echo(f"{note} has no line {line}", err=True)
        sys.exit(2)

    current = parse_inline_attributes(text[position.start : position.end])
    patch = {**current, **patch}

    try:
        new_text = rewrite_list_item(text, position, patch, suppress)
    except NoteCalError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if new_text is None:
        click.echo(f"Line {line} of {note} is not a list item", err=True)
        sys.exit(2)

    new_line = new_text[position.start :].splitlines()[0]

    if dry_run:
        click.echo(new_line)
        return

    try:
        write_note(note, "note", new_text)
    except NoteCalError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    logger.info(f"Rewrote line {line} of {note}")
    click.echo(new_line)
