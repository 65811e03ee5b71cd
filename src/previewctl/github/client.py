"""GitHub REST API client.

This module provides the GitHubClient used for pull request lookups,
deployment records and pull request comments.
"""

from __future__ import annotations

import contextlib
import logging
from typing import Any

import requests
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import Timeout

from previewctl.lib.errors import GitHubAPIError, GitHubConnectionError
from previewctl.models.config import GitHubConfig

logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"


class GitHubClient:
    """Client for the subset of the GitHub REST API the controller uses.

    Example:
        >>> client = GitHubClient(config.github)
        >>> pr = client.get_pull_request(42)
        >>> pr["head"]["ref"]
        'feature-x'
    """

    DEFAULT_TIMEOUT = 10.0  # seconds

    def __init__(
        self,
        config: GitHubConfig,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize client with repository settings.

        Args:
            config: GitHub repository and token settings
            timeout: Request timeout in seconds
            session: Optional pre-built session (used by tests)
        """
        self.config = config
        self.base_url = config.api_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {config.token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
            }
        )

    @property
    def repo_url(self) -> str:
        """Repository API URL."""
        return f"{self.base_url}/repos/{self.config.owner}/{self.config.name}"

    def get_pull_request(self, number: int) -> dict[str, Any]:
        """Fetch a pull request by number.

        Raises:
            GitHubConnectionError: Network/timeout issues
            GitHubAPIError: API returned error status
        """
        response = self._request("GET", f"{self.repo_url}/pulls/{number}")
        return dict(response.json())

    def list_deployments(
        self,
        ref: str,
        environment: str | None = None,
        per_page: int = 1,
    ) -> list[dict[str, Any]]:
        """List deployments for a ref, newest first (first page only)."""
        params: dict[str, str | int] = {"ref": ref, "per_page": per_page}
        if environment:
            params["environment"] = environment
        response = self._request("GET", f"{self.repo_url}/deployments", params=params)
        return list(response.json())

    def create_deployment_status(
        self, deployment_id: int, state: str, description: str | None = None
    ) -> dict[str, Any]:
        """Add a status to a deployment."""
        payload: dict[str, Any] = {"state": state}
        if description:
            payload["description"] = description
        response = self._request(
            "POST",
            f"{self.repo_url}/deployments/{deployment_id}/statuses",
            json=payload,
        )
        return dict(response.json())

    def create_issue_comment(self, issue_number: int, body: str) -> dict[str, Any]:
        """Add a comment to an issue or pull request conversation."""
        response = self._request(
            "POST",
            f"{self.repo_url}/issues/{issue_number}/comments",
            json={"body": body},
        )
        return dict(response.json())

    def _request(
        self,
        method: str,
        url: str,
        params: dict[str, str | int] | None = None,
        json: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Execute HTTP request with error handling.

        Raises:
            GitHubConnectionError: Connection/timeout issues
            GitHubAPIError: Non-2xx status code
        """
        logger.debug(f"GitHub {method} {url} params={params}")
        try:
            response = self._session.request(
                method=method,
                url=url,
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except (Timeout, RequestsConnectionError) as e:
            raise GitHubConnectionError(self.base_url, original_error=e) from e

        if not response.ok:
            detail = None
            with contextlib.suppress(Exception):
                detail = response.json().get("message")
            raise GitHubAPIError(url, response.status_code, detail)

        return response
