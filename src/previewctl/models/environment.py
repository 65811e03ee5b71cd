"""Models for environments hosted on the deployment platform."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EnvironmentStatus(str, Enum):
    """Lifecycle status reported by the environment platform.

    Values match the strings Elastic Beanstalk returns. An environment that
    does not exist has no status at all and is represented as ``None``.
    """

    LAUNCHING = "Launching"
    UPDATING = "Updating"
    READY = "Ready"
    TERMINATING = "Terminating"
    TERMINATED = "Terminated"
    ABORTING = "Aborting"
    LINKING_FROM = "LinkingFrom"
    LINKING_TO = "LinkingTo"


class Environment(BaseModel):
    """A single provisioned environment as described by the platform.

    Attributes:
        application_name: Parent application the environment belongs to
        environment_name: Environment name derived from the PR number
        environment_id: Platform identifier for this incarnation
        status: Current lifecycle status
        cname: Public hostname, if assigned
    """

    model_config = ConfigDict(extra="forbid")

    application_name: str = Field(..., description="Parent application name")
    environment_name: str = Field(..., description="Environment name")
    environment_id: str | None = Field(
        default=None, description="Platform identifier for the environment"
    )
    status: EnvironmentStatus = Field(..., description="Current lifecycle status")
    cname: str | None = Field(default=None, description="Public hostname")

    @property
    def is_live(self) -> bool:
        """Whether this environment still has something to tear down."""
        return self.status is not EnvironmentStatus.TERMINATED


class TerminationAck(BaseModel):
    """Acknowledgement returned when a termination command is accepted."""

    model_config = ConfigDict(extra="forbid")

    environment_name: str = Field(..., description="Environment being terminated")
    environment_id: str | None = Field(
        default=None, description="Platform identifier for the environment"
    )
    status: EnvironmentStatus | None = Field(
        default=None, description="Status echoed by the platform"
    )
