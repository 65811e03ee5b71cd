"""Environment variable helpers for configuration files.

Supports ``${VAR_NAME}`` references inside YAML configuration and loading
``.env`` files without overriding variables already set by the runner.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from dotenv import load_dotenv

from previewctl.lib.errors import ConfigError

ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def substitute_env_vars(text: str) -> str:
    """Replace ``${VAR}`` references with values from the environment.

    Args:
        text: Raw configuration text

    Returns:
        Text with every reference substituted

    Raises:
        ConfigError: If a referenced variable is not set
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        value = os.environ.get(name)
        if value is None:
            raise ConfigError(
                name,
                f"Environment variable '{name}' is referenced but not set",
            )
        return value

    return ENV_VAR_PATTERN.sub(_replace, text)


def get_env_var(name: str, default: str | None = None) -> str | None:
    """Return an environment variable, treating empty strings as unset."""
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return value


def load_env_file(path: Path | None = None) -> bool:
    """Load a ``.env`` file into the process environment.

    Existing variables win over values from the file.

    Args:
        path: Explicit file path; defaults to ``.env`` in the working directory

    Returns:
        True if a file was found and loaded
    """
    env_path = path or Path.cwd() / ".env"
    if not env_path.is_file():
        return False
    return load_dotenv(env_path, override=False)
