"""Default configuration values for notecal."""

# Config file looked up in the working directory when no path is given
DEFAULT_CONFIG_FILENAME = "notecal.yaml"

# Environment variable naming an explicit config file
CONFIG_ENV_VAR = "NOTECAL_CONFIG"

# Heading that owns the events of a note
DEFAULT_HEADING = "Events"

DEFAULT_COLOR = "#7f6df2"

# Daily notes are named after their date, e.g. 2024-03-05.md
DAILY_NOTE_SUFFIX = ".md"
