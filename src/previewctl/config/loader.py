"""Configuration loader for previewctl.

This module provides the ConfigLoader class for building a validated
ControllerConfig from an optional YAML file and the environment a GitHub
Actions runner provides.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from previewctl.config.env_loader import load_env_file, substitute_env_vars
from previewctl.config.validator import flatten_pydantic_errors
from previewctl.lib.errors import ConfigError
from previewctl.models.config import ControllerConfig

logger = logging.getLogger(__name__)

# Configuration field path to environment variable names, first match wins
ENV_VAR_MAP: dict[tuple[str, ...], tuple[str, ...]] = {
    ("application_name",): ("PREVIEWCTL_APPLICATION_NAME",),
    ("environment_prefix",): ("PREVIEWCTL_ENVIRONMENT_PREFIX",),
    ("log_url",): ("PREVIEWCTL_LOG_URL",),
    ("timeout",): ("PREVIEWCTL_TIMEOUT",),
    ("aws", "region"): ("AWS_REGION", "AWS_DEFAULT_REGION"),
    ("aws", "profile"): ("AWS_PROFILE",),
    ("github", "repository"): ("GITHUB_REPOSITORY",),
    ("github", "token"): ("GITHUB_TOKEN",),
    ("github", "api_url"): ("GITHUB_API_URL",),
    ("github", "server_url"): ("GITHUB_SERVER_URL",),
    ("github", "run_id"): ("GITHUB_RUN_ID",),
    ("github", "deployment_environment"): ("PREVIEWCTL_DEPLOYMENT_ENVIRONMENT",),
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Deep merge override dict into base dict (in-place).

    For nested dicts, merging is recursive.
    For other types, override completely replaces base.
    """
    for key, override_value in override.items():
        if (
            key in base
            and isinstance(base[key], dict)
            and isinstance(override_value, dict)
        ):
            _deep_merge(base[key], override_value)
        else:
            base[key] = override_value


def _env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Build a nested config dict from the environment variables that are set."""
    overrides: dict[str, Any] = {}
    for field_path, names in ENV_VAR_MAP.items():
        value = next((env[name] for name in names if env.get(name)), None)
        if value is None:
            continue
        target = overrides
        for part in field_path[:-1]:
            target = target.setdefault(part, {})
        target[field_path[-1]] = value
    return overrides


class ConfigLoader:
    """Loads and validates controller configuration.

    Configuration precedence (highest to lowest):
    1. Explicit settings in the YAML config file
    2. Environment variables (see ENV_VAR_MAP)
    3. Model defaults
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the loader.

        Args:
            env: Environment mapping to read; defaults to ``os.environ``
        """
        self._env = env

    def parse_yaml(self, file_path: str) -> dict[str, Any]:
        """Parse a YAML config file with ``${VAR}`` substitution.

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        path = Path(file_path)
        try:
            raw_text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(
                "config_file",
                f"Configuration file not found at {file_path}. "
                f"Please ensure the file exists at this path.",
            ) from e

        try:
            content = yaml.safe_load(substitute_env_vars(raw_text))
        except yaml.YAMLError as e:
            raise ConfigError(
                "yaml_parse",
                f"Failed to parse YAML file {file_path}: {str(e)}",
            ) from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigError(
                "yaml_parse",
                f"Expected a mapping at the top level of {file_path}",
            )
        return content

    def load(self, file_path: str | None = None) -> ControllerConfig:
        """Build a validated ControllerConfig.

        Args:
            file_path: Optional YAML config file

        Returns:
            Validated ControllerConfig

        Raises:
            ConfigError: If the file is invalid or required settings are missing
        """
        if self._env is None:
            load_env_file(Path(file_path).parent / ".env" if file_path else None)
            env: Mapping[str, str] = os.environ
        else:
            env = self._env

        merged = _env_overrides(env)
        if file_path:
            logger.debug(f"Loading configuration from {file_path}")
            _deep_merge(merged, self.parse_yaml(file_path))

        try:
            return ControllerConfig(**merged)
        except PydanticValidationError as e:
            error_text = "\n".join(flatten_pydantic_errors(e))
            raise ConfigError(
                "controller_config",
                f"Invalid controller configuration:\n{error_text}",
            ) from e
