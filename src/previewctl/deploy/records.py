"""Locate the deployment record tracked for a source branch."""

from __future__ import annotations

from typing import Any

from previewctl.github.client import GitHubClient
from previewctl.lib.logging_config import get_logger
from previewctl.models.deployment_record import DeploymentRecord

logger = get_logger(__name__)


class DeploymentRecordLocator:
    """Find the most recent GitHub deployment for a ref."""

    def __init__(self, client: GitHubClient, environment: str | None = None) -> None:
        """Create a locator.

        Args:
            client: GitHub API client
            environment: Restrict lookups to one GitHub deployment environment
        """
        self._client = client
        self._environment = environment

    def find_latest(self, ref: str) -> DeploymentRecord | None:
        """Return the newest deployment for ``ref``, or None if there is none.

        Only the first page (of size one) is requested; GitHub lists
        deployments newest first.

        Raises:
            GitHubConnectionError: Network/timeout issues
            GitHubAPIError: API returned error status
        """
        deployments = self._client.list_deployments(
            ref, environment=self._environment, per_page=1
        )
        if not deployments:
            logger.info(f"No deployment record found for ref {ref}")
            return None

        record = _to_record(deployments[0])
        logger.debug(f"Latest deployment for ref {ref} is {record.id}")
        return record


def _to_record(payload: dict[str, Any]) -> DeploymentRecord:
    return DeploymentRecord.model_validate(payload)
