"""Logging configuration for notecal.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves. The CLI calls :func:`setup_logging` once per
command with the ``--verbose``/``--quiet`` flags.
"""

import logging
import sys

ROOT_LOGGER_NAME = "notecal"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the notecal logger hierarchy.

    Args:
        verbose: Log at DEBUG level (takes precedence over quiet)
        quiet: Only log warnings and errors
    """
    global _handler

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root = logging.getLogger(ROOT_LOGGER_NAME)

    # Replace rather than stack handlers when a command reconfigures logging
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)
    root.setLevel(level)
