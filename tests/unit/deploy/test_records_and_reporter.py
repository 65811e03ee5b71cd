"""Unit tests for the deployment record locator and notification reporter."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from previewctl.deploy.records import DeploymentRecordLocator
from previewctl.deploy.reporter import (
    FAILURE_COMMENT,
    SUCCESS_COMMENT,
    NotificationReporter,
    failure_comment,
)
from previewctl.github.client import GitHubClient
from previewctl.lib.errors import GitHubAPIError, GitHubConnectionError
from previewctl.models.deployment_record import DeploymentRecordState


@pytest.fixture
def client() -> MagicMock:
    return MagicMock(spec=GitHubClient)


class TestDeploymentRecordLocator:
    """Tests for DeploymentRecordLocator.find_latest."""

    def test_returns_first_record(self, client: MagicMock) -> None:
        client.list_deployments.return_value = [
            {
                "id": 77,
                "ref": "feature-x",
                "environment": "preview",
                "created_at": "2024-03-01T10:00:00Z",
                "sha": "abc123",
            }
        ]
        locator = DeploymentRecordLocator(client)

        record = locator.find_latest("feature-x")

        assert record is not None
        assert record.id == 77
        assert record.ref == "feature-x"
        assert record.created_at is not None
        client.list_deployments.assert_called_once_with(
            "feature-x", environment=None, per_page=1
        )

    def test_returns_none_without_records(self, client: MagicMock) -> None:
        client.list_deployments.return_value = []

        assert DeploymentRecordLocator(client).find_latest("never-deployed") is None

    def test_passes_environment_filter(self, client: MagicMock) -> None:
        client.list_deployments.return_value = []

        DeploymentRecordLocator(client, environment="preview").find_latest("b")

        client.list_deployments.assert_called_once_with(
            "b", environment="preview", per_page=1
        )

    def test_api_errors_propagate(self, client: MagicMock) -> None:
        client.list_deployments.side_effect = GitHubConnectionError(
            "https://api.github.com"
        )

        with pytest.raises(GitHubConnectionError):
            DeploymentRecordLocator(client).find_latest("b")


class TestNotificationReporter:
    """Tests for best-effort reporting."""

    def test_mark_inactive_posts_inactive_status(self, client: MagicMock) -> None:
        outcome = NotificationReporter(client).mark_inactive(77)

        assert outcome.ok is True
        assert outcome.step == "mark_inactive"
        client.create_deployment_status.assert_called_once_with(
            77, DeploymentRecordState.INACTIVE.value
        )

    def test_mark_inactive_twice_is_harmless(self, client: MagicMock) -> None:
        reporter = NotificationReporter(client)

        outcomes = [reporter.mark_inactive(77), reporter.mark_inactive(77)]

        assert all(outcome.ok for outcome in outcomes)

    def test_mark_inactive_failure_is_returned(self, client: MagicMock) -> None:
        client.create_deployment_status.side_effect = GitHubAPIError(
            "https://api.github.com/x", 404, "Not Found"
        )

        outcome = NotificationReporter(client).mark_inactive(77)

        assert outcome.ok is False
        assert "Not Found" in (outcome.error or "")

    def test_post_comment(self, client: MagicMock) -> None:
        outcome = NotificationReporter(client).post_comment(42, SUCCESS_COMMENT)

        assert outcome.ok is True
        client.create_issue_comment.assert_called_once_with(42, SUCCESS_COMMENT)

    def test_post_comment_failure_does_not_raise(self, client: MagicMock) -> None:
        client.create_issue_comment.side_effect = GitHubConnectionError(
            "https://api.github.com", original_error=TimeoutError("read timed out")
        )

        outcome = NotificationReporter(client).post_comment(42, SUCCESS_COMMENT)

        assert outcome.ok is False
        assert outcome.step == "post_comment"


class TestFailureComment:
    def test_includes_log_link(self) -> None:
        body = failure_comment("https://github.com/acme/x/actions/runs/5")

        assert body.startswith(FAILURE_COMMENT)
        assert "(https://github.com/acme/x/actions/runs/5)" in body

    def test_without_log_link(self) -> None:
        assert failure_comment(None) == FAILURE_COMMENT
