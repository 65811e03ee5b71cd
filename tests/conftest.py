"""Pytest configuration and shared fixtures for previewctl tests."""

import os
from collections.abc import Generator
from typing import Any

import pytest

from previewctl.models.config import AWSConfig, ControllerConfig, GitHubConfig

# Environment variables read by ConfigLoader; cleared so the runner's own
# GitHub Actions environment never leaks into tests
CONTROLLER_ENV_VARS = (
    "PREVIEWCTL_APPLICATION_NAME",
    "PREVIEWCTL_ENVIRONMENT_PREFIX",
    "PREVIEWCTL_LOG_URL",
    "PREVIEWCTL_TIMEOUT",
    "PREVIEWCTL_DEPLOYMENT_ENVIRONMENT",
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
    "AWS_PROFILE",
    "GITHUB_REPOSITORY",
    "GITHUB_TOKEN",
    "GITHUB_API_URL",
    "GITHUB_SERVER_URL",
    "GITHUB_RUN_ID",
    "GITHUB_EVENT_NAME",
    "GITHUB_EVENT_PATH",
    "GITHUB_WORKFLOW",
)


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Generator[dict[str, str]]:
    """Provide an environment without any controller variables set.

    Yields:
        Copy of the original environment variables
    """
    original_env = os.environ.copy()
    for name in CONTROLLER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield original_env


@pytest.fixture
def controller_config() -> ControllerConfig:
    """A complete, valid controller configuration."""
    return ControllerConfig(
        application_name="hello-web",
        aws=AWSConfig(region="us-east-1"),
        github=GitHubConfig(
            repository="acme/hello-web",
            token="ghp_test",
            run_id="123456",
        ),
    )


@pytest.fixture
def github_env() -> dict[str, str]:
    """Environment a GitHub Actions runner would provide."""
    return {
        "PREVIEWCTL_APPLICATION_NAME": "hello-web",
        "AWS_REGION": "us-east-1",
        "GITHUB_REPOSITORY": "acme/hello-web",
        "GITHUB_TOKEN": "ghp_test",
        "GITHUB_SERVER_URL": "https://github.com",
        "GITHUB_RUN_ID": "987",
    }


def pytest_configure(config: Any) -> None:
    """Configure pytest with marker options."""
    config.addinivalue_line(
        "markers",
        "unit: marks tests as unit tests",
    )
