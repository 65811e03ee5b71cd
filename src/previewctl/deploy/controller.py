"""Lifecycle controller for per-pull-request preview environments.

One call to ``LifecycleController.handle`` processes one TerminationRequest:

    Idle -> Resolving -> (Terminating | NoOpTerminated) -> Reporting -> Done

with ``Failed`` reachable from any step and ``Superseded`` reachable whenever
a newer invocation for the same concurrency key cancels this one. Steps run
strictly in sequence; each is a blocking round trip to an external system.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from previewctl.deploy.concurrency import CancellationToken, InvocationCancelled
from previewctl.deploy.platforms.base import BaseEnvironmentPlatform
from previewctl.deploy.records import DeploymentRecordLocator
from previewctl.deploy.reporter import (
    SUCCESS_COMMENT,
    NotificationReporter,
    failure_comment,
)
from previewctl.github.client import GitHubClient
from previewctl.lib.errors import PreviewCtlError, ValidationError
from previewctl.lib.logging_config import get_logger
from previewctl.models.environment import EnvironmentStatus
from previewctl.models.invocation import (
    ControllerState,
    InvocationResult,
    StepOutcome,
)
from previewctl.models.trigger import TerminationRequest

logger = get_logger(__name__)


def should_terminate(
    environment_name: str | None, status: EnvironmentStatus | None
) -> bool:
    """Decide whether there is a live environment to tear down.

    A missing environment, a missing status and a Terminated status all mean
    there is nothing to destroy. Every later step is gated on this, which is
    what makes repeated triggers harmless.
    """
    if environment_name is None or status is None:
        return False
    return status is not EnvironmentStatus.TERMINATED


class _Invocation:
    """Mutable bookkeeping for a single run of the state machine."""

    def __init__(self, request: TerminationRequest) -> None:
        self.request = request
        self.state = ControllerState.IDLE
        self.fields: dict[str, Any] = {}
        self.advisory: list[StepOutcome] = []

    def transition(self, state: ControllerState) -> None:
        logger.info(
            f"PR #{self.request.pr_number}: {self.state.value} -> {state.value}"
        )
        self.state = state

    def result(self, error: str | None = None) -> InvocationResult:
        return InvocationResult(
            state=self.state,
            request=self.request,
            advisory=list(self.advisory),
            error=error,
            **self.fields,
        )


class LifecycleController:
    """Tear down the preview environment owned by a pull request."""

    def __init__(
        self,
        *,
        application_name: str,
        platform: BaseEnvironmentPlatform,
        github: GitHubClient,
        locator: DeploymentRecordLocator,
        reporter: NotificationReporter,
        log_url: str | None = None,
    ) -> None:
        """Wire the controller to its collaborators.

        Args:
            application_name: Application owning the preview environments
            platform: Environment status client
            github: Client used to resolve a pull request's head branch
            locator: Finds the latest deployment record for a branch
            reporter: Posts comments and retires deployment records
            log_url: Link to this invocation's logs for failure comments
        """
        self._application_name = application_name
        self._platform = platform
        self._github = github
        self._locator = locator
        self._reporter = reporter
        self._log_url = log_url

    def handle(
        self,
        request: TerminationRequest,
        token: CancellationToken | None = None,
    ) -> InvocationResult:
        """Run one invocation to a terminal state.

        External failures (any ``PreviewCtlError``) never escape: they end the
        invocation in ``Failed`` and are reported on the pull request. Other
        exceptions are bugs and propagate.

        Args:
            request: The termination request for this trigger
            token: Cancellation token from the invocation's concurrency group

        Returns:
            InvocationResult describing the terminal state reached
        """
        run = _Invocation(request)
        checkpoint = token.raise_if_cancelled if token else _no_checkpoint

        try:
            run.transition(ControllerState.RESOLVING)
            checkpoint()
            environment_name = self._platform.resolve_environment_name(
                self._application_name, request.pr_number
            )
            if environment_name is None:
                return self._noop(run, environment_name, None)

            checkpoint()
            status = self._platform.get_status(self._application_name, environment_name)
            run.fields.update(environment_name=environment_name, status=status)

            if not should_terminate(environment_name, status):
                return self._noop(run, environment_name, status)

            run.transition(ControllerState.TERMINATING)
            checkpoint()
            head_ref = request.head_ref or self._resolve_head_ref(request.pr_number)
            run.fields["head_ref"] = head_ref

            checkpoint()
            self._platform.terminate(environment_name, force=True)
            run.fields["terminated"] = True
            logger.info(f"Termination of {environment_name} requested")

            checkpoint()
            record = self._locator.find_latest(head_ref)

            run.transition(ControllerState.REPORTING)
            checkpoint()
            if record is not None:
                run.fields["record_id"] = record.id
                run.advisory.append(
                    self._advise(
                        "mark_inactive",
                        lambda: self._reporter.mark_inactive(record.id),
                    )
                )
            run.advisory.append(
                self._advise(
                    "post_comment",
                    lambda: self._reporter.post_comment(
                        request.pr_number, SUCCESS_COMMENT
                    ),
                )
            )
            run.transition(ControllerState.DONE)
            return run.result()

        except InvocationCancelled:
            logger.warning(
                f"PR #{request.pr_number}: superseded during {run.state.value}"
            )
            run.transition(ControllerState.SUPERSEDED)
            return run.result()

        except PreviewCtlError as exc:
            logger.error(f"PR #{request.pr_number}: {run.state.value} failed: {exc}")
            return self._fail(run, exc)

    def _noop(
        self,
        run: _Invocation,
        environment_name: str | None,
        status: EnvironmentStatus | None,
    ) -> InvocationResult:
        logger.info(
            f"PR #{run.request.pr_number}: no live environment "
            f"(name={environment_name}, status={status}), nothing to do"
        )
        run.transition(ControllerState.NOOP_TERMINATED)
        return run.result()

    def _resolve_head_ref(self, pr_number: int) -> str:
        """Look up the head branch of a pull request."""
        pull_request = self._github.get_pull_request(pr_number)
        head_ref = (pull_request.get("head") or {}).get("ref")
        if not head_ref:
            raise ValidationError(
                field="head.ref",
                message=f"Pull request #{pr_number} has no head branch",
                expected="branch name",
                actual=repr(head_ref),
            )
        return str(head_ref)

    def _fail(self, run: _Invocation, exc: BaseException) -> InvocationResult:
        run.transition(ControllerState.FAILED)
        run.advisory.append(
            self._advise(
                "post_comment",
                lambda: self._reporter.post_comment(
                    run.request.pr_number, failure_comment(self._log_url)
                ),
            )
        )
        return run.result(error=str(exc))

    @staticmethod
    def _advise(step: str, call: Callable[[], StepOutcome]) -> StepOutcome:
        """Run a best-effort step behind its own failure boundary."""
        try:
            return call()
        except Exception as exc:
            logger.warning(f"Best-effort step {step} failed: {exc}")
            return StepOutcome.failure(step, exc)


def _no_checkpoint() -> None:
    return None
