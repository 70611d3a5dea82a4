"""Custom exception hierarchy for notecal configuration and operations."""


class NoteCalError(Exception):
    """Base exception for all notecal errors.

    All notecal-specific exceptions inherit from this class, enabling
    centralized exception handling in the CLI and in host applications.
    """

    pass


class ConfigError(NoteCalError):
    """Exception raised for configuration errors.

    Raised when the calendar configuration file cannot be parsed or does not
    match the configuration schema.

    Attributes:
        field: The configuration field that caused the error
        message: Human-readable error message describing the issue
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize ConfigError with field and message.

        Args:
            field: Configuration field name where error occurred
            message: Descriptive error message
        """
        self.field = field
        self.message = message
        super().__init__(f"Configuration error in '{field}': {message}")


class FileNotFoundError(NoteCalError):
    """Exception raised when a configuration or note file is not found.

    Attributes:
        path: Path to the file that was not found
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str) -> None:
        """Initialize FileNotFoundError with path and message.

        Args:
            path: Path to the file that was not found
            message: Descriptive error message, optionally with suggestions
        """
        self.path = path
        self.message = message
        super().__init__(f"File not found: {path}\n{message}")


class InlineAttributeError(NoteCalError):
    """Exception raised when a value cannot be written as an inline tag.

    The tag grammar has no escape sequences, so a ``]`` or a line break inside
    a value (or a malformed key) would silently change what is read back.

    Attributes:
        key: The attribute name being written
        message: Description of the problem
    """

    def __init__(self, key: str, message: str) -> None:
        """Create an inline attribute error for a single key."""
        self.key = key
        self.message = message
        super().__init__(f"Cannot write inline attribute '{key}': {message}")


class CalendarSourceError(NoteCalError):
    """Exception raised for calendar source lookup or I/O failures.

    Attributes:
        source_type: The calendar source type involved
        message: Human-readable error message
    """

    def __init__(self, source_type: str, message: str) -> None:
        """Create a calendar source error with context."""
        self.source_type = source_type
        self.message = message
        super().__init__(f"Calendar source '{source_type}': {message}")
