"""Controller states and invocation results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from previewctl.models.environment import EnvironmentStatus
from previewctl.models.trigger import TerminationRequest


class ControllerState(str, Enum):
    """States of a single controller invocation."""

    IDLE = "idle"
    RESOLVING = "resolving"
    TERMINATING = "terminating"
    NOOP_TERMINATED = "noop-terminated"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"
    SUPERSEDED = "superseded"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition can happen from this state."""
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset(
    {
        ControllerState.DONE,
        ControllerState.FAILED,
        ControllerState.NOOP_TERMINATED,
        ControllerState.SUPERSEDED,
    }
)


class StepOutcome(BaseModel):
    """Result of a best-effort step such as posting a comment.

    Outcomes are logged and returned for inspection, never raised.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    step: str = Field(..., description="Name of the advisory step")
    ok: bool = Field(..., description="Whether the step succeeded")
    error: str | None = Field(default=None, description="Failure description")

    @classmethod
    def success(cls, step: str) -> StepOutcome:
        return cls(step=step, ok=True)

    @classmethod
    def failure(cls, step: str, error: BaseException) -> StepOutcome:
        return cls(step=step, ok=False, error=str(error))


class InvocationResult(BaseModel):
    """Summary of one controller invocation.

    Attributes:
        state: Terminal state reached
        request: The request that was processed
        environment_name: Resolved environment name, if one exists
        status: Status observed before any termination
        terminated: Whether a termination command was issued
        head_ref: Head branch used for the record lookup
        record_id: Deployment record that was located, if any
        advisory: Outcomes of best-effort steps in execution order
        error: Description of the failure that ended the invocation
    """

    model_config = ConfigDict(extra="forbid")

    state: ControllerState = Field(..., description="Terminal state reached")
    request: TerminationRequest = Field(..., description="Processed request")
    environment_name: str | None = Field(default=None)
    status: EnvironmentStatus | None = Field(default=None)
    terminated: bool = Field(default=False)
    head_ref: str | None = Field(default=None)
    record_id: int | None = Field(default=None)
    advisory: list[StepOutcome] = Field(default_factory=list)
    error: str | None = Field(default=None)

    @property
    def succeeded(self) -> bool:
        """Whether the invocation ended without a fatal failure."""
        return self.state is not ControllerState.FAILED
