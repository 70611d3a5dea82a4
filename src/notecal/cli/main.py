"""Entry point of the notecal command line interface."""

import click

from notecal import __version__
from notecal.cli.commands.calendars import calendars
from notecal.cli.commands.events import events
from notecal.cli.commands.set import set_cmd


@click.group()
@click.version_option(__version__, prog_name="notecal")
def main() -> None:
    """Read and edit calendar events kept in plain-text notes.

    Events are list items carrying inline tags:

    \b
        ## Events
        - [ ] Dentist [date:: 2024-03-05]  [startTime:: 09:30]
        - Standup [daysOfWeek:: M,W,F]  [startTime:: 10:00]
    """
    pass


main.add_command(events)
main.add_command(calendars)
main.add_command(set_cmd)
