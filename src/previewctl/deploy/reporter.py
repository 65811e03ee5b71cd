"""Best-effort reporting back to GitHub.

Each method isolates its own failure behind a StepOutcome so that a failed
report can never change or hide the outcome of the termination itself.
"""

from __future__ import annotations

from previewctl.github.client import GitHubClient
from previewctl.lib.errors import PreviewCtlError
from previewctl.lib.logging_config import get_logger
from previewctl.models.deployment_record import DeploymentRecordState
from previewctl.models.invocation import StepOutcome

logger = get_logger(__name__)

SUCCESS_COMMENT = "Environment Terminated Successfully."
FAILURE_COMMENT = "Environment Termination Failed."


def failure_comment(log_url: str | None) -> str:
    """Build the failure comment body, linking to the logs when known."""
    if not log_url:
        return FAILURE_COMMENT
    return f"{FAILURE_COMMENT}\n\n[View logs]({log_url})"


class NotificationReporter:
    """Posts PR comments and retires deployment records."""

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def mark_inactive(self, record_id: int) -> StepOutcome:
        """Set a deployment record's state to inactive.

        GitHub accepts repeated inactive statuses, so calling this twice for
        the same record is harmless.
        """
        step = "mark_inactive"
        try:
            self._client.create_deployment_status(
                record_id, DeploymentRecordState.INACTIVE.value
            )
        except PreviewCtlError as exc:
            logger.warning(f"Could not mark deployment {record_id} inactive: {exc}")
            return StepOutcome.failure(step, exc)

        logger.info(f"Marked deployment {record_id} inactive")
        return StepOutcome.success(step)

    def post_comment(self, pr_number: int, body: str) -> StepOutcome:
        """Append a comment to the pull request conversation."""
        step = "post_comment"
        try:
            self._client.create_issue_comment(pr_number, body)
        except PreviewCtlError as exc:
            logger.warning(f"Could not comment on pull request #{pr_number}: {exc}")
            return StepOutcome.failure(step, exc)

        logger.info(f"Commented on pull request #{pr_number}")
        return StepOutcome.success(step)
