"""Environment platforms hosting per-PR preview environments."""

from __future__ import annotations

from previewctl.deploy.naming import make_namer
from previewctl.deploy.platforms.base import BaseEnvironmentPlatform
from previewctl.models.config import ControllerConfig


def create_platform(config: ControllerConfig) -> BaseEnvironmentPlatform:
    """Create the environment platform for a controller configuration."""
    from previewctl.deploy.platforms.elastic_beanstalk import (
        ElasticBeanstalkPlatform,
    )

    return ElasticBeanstalkPlatform(
        config.aws, namer=make_namer(config.environment_prefix)
    )


__all__ = ["BaseEnvironmentPlatform", "create_platform"]
