"""Shared test doubles for controller tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from previewctl.deploy.controller import LifecycleController
from previewctl.deploy.naming import make_namer
from previewctl.deploy.platforms.base import BaseEnvironmentPlatform
from previewctl.deploy.records import DeploymentRecordLocator
from previewctl.deploy.reporter import NotificationReporter
from previewctl.github.client import GitHubClient
from previewctl.models.environment import EnvironmentStatus, TerminationAck


class FakePlatform(BaseEnvironmentPlatform):
    """In-memory environment platform recording every call.

    ``environments`` maps environment names to their current status; a
    successful terminate moves the environment to Terminated.
    """

    def __init__(self, calls: list[tuple[Any, ...]]) -> None:
        self.calls = calls
        self.environments: dict[str, EnvironmentStatus] = {}
        self.namer = make_namer("pr")
        self.fail_on: dict[str, Exception] = {}
        self.terminate_count = 0

    def resolve_environment_name(
        self, application_name: str, pr_number: int
    ) -> str | None:
        self.calls.append(("resolve_environment_name", application_name, pr_number))
        self._maybe_fail("resolve")
        name = self.namer(pr_number)
        return name if name in self.environments else None

    def get_status(
        self, application_name: str, environment_name: str
    ) -> EnvironmentStatus | None:
        self.calls.append(("get_status", application_name, environment_name))
        self._maybe_fail("status")
        return self.environments.get(environment_name)

    def terminate(self, environment_name: str, force: bool = True) -> TerminationAck:
        self.calls.append(("terminate", environment_name, force))
        self._maybe_fail("terminate")
        self.terminate_count += 1
        self.environments[environment_name] = EnvironmentStatus.TERMINATED
        return TerminationAck(
            environment_name=environment_name, status=EnvironmentStatus.TERMINATING
        )

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.fail_on:
            raise self.fail_on[operation]


@pytest.fixture
def calls() -> list[tuple[Any, ...]]:
    """Ordered log of calls made to every external collaborator."""
    return []


@pytest.fixture
def platform(calls: list[tuple[Any, ...]]) -> FakePlatform:
    return FakePlatform(calls)


@pytest.fixture
def github(calls: list[tuple[Any, ...]]) -> MagicMock:
    """GitHub client double appending to the shared call log."""
    client = MagicMock(spec=GitHubClient)
    client.deployments = {}
    client.pull_requests = {}

    def get_pull_request(number: int) -> dict[str, Any]:
        calls.append(("get_pull_request", number))
        return client.pull_requests[number]

    def list_deployments(
        ref: str, environment: str | None = None, per_page: int = 1
    ) -> list[dict[str, Any]]:
        calls.append(("list_deployments", ref))
        return client.deployments.get(ref, [])[:per_page]

    def create_deployment_status(
        deployment_id: int, state: str, description: str | None = None
    ) -> dict[str, Any]:
        calls.append(("create_deployment_status", deployment_id, state))
        return {"state": state}

    def create_issue_comment(issue_number: int, body: str) -> dict[str, Any]:
        calls.append(("create_issue_comment", issue_number, body))
        return {"body": body}

    client.get_pull_request.side_effect = get_pull_request
    client.list_deployments.side_effect = list_deployments
    client.create_deployment_status.side_effect = create_deployment_status
    client.create_issue_comment.side_effect = create_issue_comment
    return client


@pytest.fixture
def controller(platform: FakePlatform, github: MagicMock) -> LifecycleController:
    return LifecycleController(
        application_name="hello-web",
        platform=platform,
        github=github,
        locator=DeploymentRecordLocator(github),
        reporter=NotificationReporter(github),
        log_url="https://github.com/acme/hello-web/actions/runs/1",
    )

