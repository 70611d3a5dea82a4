"""CLI command listing the events of every configured calendar source.

Implements the 'notecal calendars' command.
"""

import sys
from pathlib import Path

import click

from notecal.calendars.base import read_note
from notecal.calendars.registry import create_sources
from notecal.cli.output import dumps, event_to_json, format_event, line_number
from notecal.config.loader import ConfigLoader
from notecal.lib.errors import NoteCalError
from notecal.lib.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to notecal.yaml (default: $NOTECAL_CONFIG or ./notecal.yaml)",
)
@click.option("--json", "as_json", is_flag=True, help="Output events as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
def calendars(config_path: str | None, as_json: bool, verbose: bool, quiet: bool) -> None:
    """List the events of every calendar in the configuration."""
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        config = ConfigLoader().load(config_path)
        sources = create_sources(config)
        results = [(source, source.events()) for source in sources]
        texts: dict[Path, str] = {}
        for source, items in results:
            for item in items:
                path = item.location.path
                if path not in texts:
                    texts[path] = read_note(path, source.type)
    except NoteCalError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if as_json:
        payload = [
            event_to_json(
                item.event,
                calendar=source.id,
                path=str(item.location.path),
                start=item.location.position.start,
                end=item.location.position.end,
            )
            for source, items in results
            for item in items
        ]
        click.echo(dumps(payload))
        return

    for source, items in results:
        click.echo(f"{source.id} ({len(items)} events)")
        for item in items:
            line = line_number(texts[item.location.path], item.location.position)
            click.echo(format_event(item.event, line))
