"""Deployment tracking records as exposed by the GitHub Deployments API."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DeploymentRecordState(str, Enum):
    """Deployment status states this controller reads or writes."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class DeploymentRecord(BaseModel):
    """Most recent tracked deployment for a source branch.

    Only the fields the controller needs are kept; the rest of the API
    payload is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Deployment identifier")
    ref: str = Field(..., description="Source branch the deployment was built from")
    environment: str | None = Field(
        default=None, description="Deployment environment name on GitHub"
    )
    created_at: datetime | None = Field(
        default=None, description="Creation timestamp"
    )
    state: DeploymentRecordState | str | None = Field(
        default=None, description="Latest known deployment status"
    )
