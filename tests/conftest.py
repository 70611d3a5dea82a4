"""Pytest configuration and shared fixtures for notecal tests."""

import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from notecal.models.document import Position

SAMPLE_NOTE = """\
# Launch plan

Some intro text with a [link:: that is not an event].

## Events
- [ ] Dentist [date:: 2024-03-05]  [startTime:: 09:30]  [endTime:: 10:15]
- [x] Send invoices [date:: 2024-03-04]
  - Sub note without tags
- Standup [daysOfWeek:: M,W,F]  [startTime:: 10:00]
- Broken [date:: not-a-date]

### Details
- Travel [date:: 2024-03-07]  [location:: Berlin]

## Notes
- Outside [date:: 2024-03-08]
"""


def line_position(text: str, needle: str) -> Position:
    """Return the span of the first line containing ``needle``."""
    offset = text.index(needle)
    start = text.rfind("\n", 0, offset) + 1
    end = text.find("\n", offset)
    if end == -1:
        end = len(text)
    return Position(start=start, end=end)


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test file operations.

    Yields:
        Path to temporary directory

    Cleanup:
        Automatically removes directory after test
    """
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def isolated_env() -> Iterator[dict[str, str]]:
    """Provide isolated environment variables for testing.

    Saves current environment and restores after test.

    Yields:
        Dictionary of original environment variables
    """
    original_env = os.environ.copy()
    yield original_env
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def sample_note() -> str:
    """Markdown note with events under several headings."""
    return SAMPLE_NOTE


@pytest.fixture
def find_line() -> Any:
    """Helper returning the span of the first line containing a substring."""
    return line_position


@pytest.fixture(autouse=True)
def reset_notecal_logging() -> Iterator[None]:
    """Detach handlers installed by CLI commands after each test."""
    yield
    root = logging.getLogger("notecal")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)


# Configure pytest
def pytest_configure(config: Any) -> None:
    """Configure pytest with marker options."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )
    config.addinivalue_line(
        "markers",
        "unit: marks tests as unit tests",
    )
