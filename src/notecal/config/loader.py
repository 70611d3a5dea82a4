"""Configuration loader for notecal.

This module provides the ConfigLoader class for locating, parsing, and
validating the calendar source configuration in ``notecal.yaml``.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from notecal.config.defaults import CONFIG_ENV_VAR, DEFAULT_CONFIG_FILENAME
from notecal.config.env_loader import substitute_env_vars
from notecal.config.validator import flatten_pydantic_errors
from notecal.lib.errors import ConfigError, FileNotFoundError
from notecal.models.calendar import (
    DailyNoteCalendarConfig,
    NoteCalConfig,
    NoteCalendarConfig,
)

logger = logging.getLogger(__name__)


def _read_yaml_with_env_substitution(
    path: Path, env: Mapping[str, str]
) -> dict[str, Any] | None:
    """Read a YAML file with environment variable substitution.

    Args:
        path: Path to YAML file
        env: Environment used for ``${VAR}`` substitution

    Returns:
        Parsed dictionary or None if empty

    Raises:
        OSError: If file cannot be read
        yaml.YAMLError: If YAML parsing fails
        ConfigError: If env var substitution fails
    """
    raw_text = path.read_text(encoding="utf-8")
    substituted = substitute_env_vars(raw_text, env)
    content = yaml.safe_load(substituted)
    return content if content else None


def _resolve_relative(base_dir: Path, target: Path) -> Path:
    """Resolve ``target`` against ``base_dir`` unless it is absolute."""
    expanded = target.expanduser()
    return expanded if expanded.is_absolute() else base_dir / expanded


class ConfigLoader:
    """Loads and validates notecal configuration from YAML files.

    This class handles:
    - Locating the config file (argument, NOTECAL_CONFIG, working directory)
    - Environment variable substitution
    - Converting validation errors into human-readable messages
    - Resolving calendar paths relative to the config file
    """

    def __init__(
        self, env: Mapping[str, str] | None = None, cwd: Path | None = None
    ) -> None:
        """Create a loader.

        Args:
            env: Environment mapping (defaults to ``os.environ``)
            cwd: Directory searched for the default config file
        """
        self.env: Mapping[str, str] = os.environ if env is None else env
        self.cwd = cwd

    def resolve_config_path(self, path: str | Path | None = None) -> Path:
        """Return the config file to load.

        Precedence: explicit ``path``, then ``NOTECAL_CONFIG``, then
        ``notecal.yaml`` in the working directory.
        """
        if path is not None:
            return Path(path)
        env_path = self.env.get(CONFIG_ENV_VAR)
        if env_path:
            logger.debug(f"Using config path from {CONFIG_ENV_VAR}: {env_path}")
            return Path(env_path)
        return (self.cwd or Path.cwd()) / DEFAULT_CONFIG_FILENAME

    def parse(self, content: dict[str, Any] | None) -> NoteCalConfig:
        """Validate parsed YAML content.

        Raises:
            ConfigError: If the content does not match the schema
        """
        if content is None:
            return NoteCalConfig()
        if not isinstance(content, dict):
            raise ConfigError(
                "config", "top level of the configuration must be a mapping"
            )
        try:
            return NoteCalConfig.model_validate(content)
        except PydanticValidationError as exc:
            raise ConfigError("config", "\n".join(flatten_pydantic_errors(exc))) from exc

    def load(self, path: str | Path | None = None) -> NoteCalConfig:
        """Load, validate and path-resolve the configuration.

        Args:
            path: Optional explicit config file path

        Returns:
            Validated NoteCalConfig with absolute calendar paths

        Raises:
            FileNotFoundError: If the config file does not exist
            ConfigError: If the file cannot be parsed or validated
        """
        config_path = self.resolve_config_path(path)
        if not config_path.is_file():
            raise FileNotFoundError(
                str(config_path),
                f"Create {DEFAULT_CONFIG_FILENAME} or set {CONFIG_ENV_VAR} "
                "to point at a configuration file.",
            )

        logger.info(f"Loading configuration from {config_path}")
        try:
            content = _read_yaml_with_env_substitution(config_path, self.env)
        except yaml.YAMLError as exc:
            raise ConfigError("yaml", f"Failed to parse {config_path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError("file", f"Failed to read {config_path}: {exc}") from exc

        config = self.parse(content)
        base_dir = config_path.parent
        calendars = []
        for source in config.calendars:
            if isinstance(source, NoteCalendarConfig):
                source = source.model_copy(
                    update={"path": _resolve_relative(base_dir, source.path)}
                )
            elif isinstance(source, DailyNoteCalendarConfig):
                source = source.model_copy(
                    update={"directory": _resolve_relative(base_dir, source.directory)}
                )
            calendars.append(source)

        logger.debug(f"Loaded {len(calendars)} calendar sources")
        return config.model_copy(update={"calendars": calendars})
