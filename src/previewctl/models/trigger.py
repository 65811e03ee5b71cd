"""Trigger events and the per-invocation termination request."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DESTROY_COMMAND = "/destroy"


class TriggerKind(str, Enum):
    """Events that may start the termination workflow."""

    EXPLICIT_COMMENT = "explicit-comment"
    PR_CLOSED = "pr-closed"


class CommentCreatedEvent(BaseModel):
    """A comment created on an issue or pull request."""

    model_config = ConfigDict(extra="forbid")

    issue_number: int = Field(..., ge=1, description="Issue or pull request number")
    is_pull_request: bool = Field(..., description="Whether the issue is a PR")
    pr_state: Literal["open", "closed"] = Field(..., description="Issue state")
    comment_body: str = Field(..., description="Raw comment body")

    @property
    def requests_destroy(self) -> bool:
        """Whether this comment asks for the PR environment to be destroyed."""
        return (
            self.is_pull_request
            and self.pr_state == "open"
            and self.comment_body == DESTROY_COMMAND
        )


class PullRequestClosedEvent(BaseModel):
    """A pull request that was closed, merged or not."""

    model_config = ConfigDict(extra="forbid")

    pr_number: int = Field(..., ge=1, description="Pull request number")
    head_ref: str = Field(..., min_length=1, description="Head branch name")


class TerminationRequest(BaseModel):
    """Unit of work handled by one controller invocation.

    ``head_ref`` is only known up front for closure events; comment triggers
    resolve it from the pull request when termination is needed.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    pr_number: int = Field(..., ge=1, description="Pull request number")
    trigger_kind: TriggerKind = Field(..., description="Event that triggered the run")
    head_ref: str | None = Field(default=None, description="Head branch name")
