"""Registry of calendar source implementations, keyed by source type."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from notecal.calendars.base import CalendarSource
from notecal.calendars.daily_note import DailyNoteCalendar
from notecal.calendars.note import NoteCalendar
from notecal.lib.errors import CalendarSourceError
from notecal.models.calendar import CalendarSourceConfig, NoteCalConfig

logger = logging.getLogger(__name__)

# Factory signature: (source config, shared inherited defaults) -> source
SourceFactory = Callable[[Any, Mapping[str, Any]], CalendarSource]

_FACTORIES: dict[str, SourceFactory] = {}


def register_source(source_type: str, factory: SourceFactory) -> None:
    """Register the factory building sources of ``source_type``.

    Raises:
        CalendarSourceError: If the type is already registered
    """
    if source_type in _FACTORIES:
        raise CalendarSourceError(source_type, "source type is already registered")
    _FACTORIES[source_type] = factory


def available_source_types() -> list[str]:
    """Return the registered source types, sorted."""
    return sorted(_FACTORIES)


def create_source(
    config: CalendarSourceConfig, shared_defaults: Mapping[str, Any] | None = None
) -> CalendarSource:
    """Build the calendar source described by ``config``.

    Raises:
        CalendarSourceError: If no implementation is registered for the type
    """
    factory = _FACTORIES.get(config.type)
    if factory is None:
        raise CalendarSourceError(
            config.type,
            f"unknown source type (available: {', '.join(available_source_types())})",
        )
    return factory(config, shared_defaults or {})


def create_sources(config: NoteCalConfig) -> list[CalendarSource]:
    """Build every calendar source of a loaded configuration."""
    sources = [create_source(source, config.defaults) for source in config.calendars]
    logger.debug(f"Created {len(sources)} calendar sources")
    return sources


register_source("note", NoteCalendar)
register_source("dailynote", DailyNoteCalendar)
