"""Environment variable substitution for configuration files."""

import os
import re
from collections.abc import Mapping

from notecal.lib.errors import ConfigError

ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def substitute_env_vars(text: str, env: Mapping[str, str] | None = None) -> str:
    """Replace ``${VAR_NAME}`` references with environment values.

    Args:
        text: Raw configuration text
        env: Environment mapping (defaults to ``os.environ``)

    Returns:
        Text with every reference replaced

    Raises:
        ConfigError: If a referenced variable is not set
    """
    environ = os.environ if env is None else env

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in environ:
            raise ConfigError(name, f"environment variable '{name}' is not set")
        return environ[name]

    return ENV_VAR_PATTERN.sub(_replace, text)
