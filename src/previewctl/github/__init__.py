"""GitHub REST API integration."""

from previewctl.github.client import GitHubClient

__all__ = ["GitHubClient"]
