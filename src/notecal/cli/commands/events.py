"""CLI command listing the events of a single note.

Implements the 'notecal events' command.
"""

import sys
from pathlib import Path

import click

from notecal.cli.output import dumps, event_to_json, format_event, line_number
from notecal.cli.values import parse_assignments
from notecal.calendars.base import read_note
from notecal.index.markdown import MarkdownIndexer
from notecal.lib.errors import NoteCalError
from notecal.lib.logging_config import get_logger, setup_logging
from notecal.serialization.events import extract_all_events

logger = get_logger(__name__)


@click.command()
@click.argument("note", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--heading",
    default=None,
    help="Only read list items under this heading (default: the whole note)",
)
@click.option(
    "--default",
    "defaults",
    multiple=True,
    metavar="KEY=VALUE",
    help="Field inherited by every event, e.g. --default date=2024-03-05",
)
@click.option("--json", "as_json", is_flag=True, help="Output events as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
def events(
    note: Path,
    heading: str | None,
    defaults: tuple[str, ...],
    as_json: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """List the events written as tagged list items in NOTE.

    \b
    EXAMPLES:

        All events of a note:
            notecal events projects/launch.md

        Events under a heading, as JSON:
            notecal events journal/2024-03-05.md --heading Events --json
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        inherited = parse_assignments(defaults)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--default") from exc

    try:
        text = read_note(note, "note")
    except NoteCalError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    index = MarkdownIndexer().index(text)
    if heading is None:
        items = index.list_items
    else:
        if index.heading_range(heading) is None:
            click.echo(f"No heading '{heading}' in {note}", err=True)
            sys.exit(1)
        items = index.list_items_under(heading)

    logger.debug(f"Reading {len(items)} list items from {note}")
    located = extract_all_events(text, items, inherited)

    if as_json:
        click.echo(
            dumps(
                [
                    event_to_json(item.event, line=line_number(text, item.position))
                    for item in located
                ]
            )
        )
        return

    if not located:
        click.echo("No events found")
        return
    for item in located:
        click.echo(format_event(item.event, line_number(text, item.position)))
