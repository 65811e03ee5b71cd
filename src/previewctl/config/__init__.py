"""Configuration loading and validation for previewctl.

Main components:
- ConfigLoader: Build a ControllerConfig from YAML and environment variables
- Environment variable substitution (${VAR_NAME} pattern)
- Validation utilities for configuration data
"""

from previewctl.config.env_loader import get_env_var, load_env_file, substitute_env_vars
from previewctl.config.loader import ConfigLoader

__all__ = [
    "ConfigLoader",
    "substitute_env_vars",
    "get_env_var",
    "load_env_file",
]
