"""Pydantic models for controller configuration.

The configuration describes the pre-authenticated collaborators the
controller talks to: the AWS account and application hosting the preview
environments, and the GitHub repository whose pull requests own them.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Regex patterns for validation
REPOSITORY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")
AWS_REGION_PATTERN = re.compile(r"^[a-z]{2}(-gov)?-[a-z]+-\d$")
# Elastic Beanstalk environment names allow letters, digits and hyphens
ENVIRONMENT_PREFIX_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]{0,30}$")


class AWSConfig(BaseModel):
    """AWS settings for the environment platform.

    Attributes:
        region: AWS region hosting the Elastic Beanstalk application
        profile: Optional named profile for the boto3 session
    """

    model_config = ConfigDict(extra="forbid")

    region: str = Field(..., description="AWS region (e.g., us-east-1)")
    profile: str | None = Field(default=None, description="Named AWS profile")

    @field_validator("region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        """Validate AWS region format."""
        if not AWS_REGION_PATTERN.match(v):
            raise ValueError(f"Invalid AWS region: {v}. Expected e.g. 'us-east-1'.")
        return v


class GitHubConfig(BaseModel):
    """GitHub repository and API settings.

    Attributes:
        repository: Repository in owner/name form
        token: Token with pull request and deployment write access
        api_url: REST API base URL
        server_url: Web URL used to build links to workflow logs
        run_id: Workflow run identifier of the current invocation
        deployment_environment: Optional GitHub deployment environment filter
    """

    model_config = ConfigDict(extra="forbid")

    repository: str = Field(..., description="Repository in owner/name form")
    token: str = Field(..., min_length=1, description="GitHub API token")
    api_url: str = Field(
        default="https://api.github.com", description="GitHub REST API base URL"
    )
    server_url: str = Field(
        default="https://github.com", description="GitHub web base URL"
    )
    run_id: str | None = Field(default=None, description="Workflow run identifier")
    deployment_environment: str | None = Field(
        default=None, description="Deployment environment to filter records by"
    )

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, v: str) -> str:
        """Validate repository is owner/name."""
        if not REPOSITORY_PATTERN.match(v):
            raise ValueError(
                f"Invalid repository: {v}. Must be in 'owner/name' form."
            )
        return v

    @property
    def owner(self) -> str:
        return self.repository.split("/", 1)[0]

    @property
    def name(self) -> str:
        return self.repository.split("/", 1)[1]


class ControllerConfig(BaseModel):
    """Top-level configuration for the lifecycle controller.

    Attributes:
        application_name: Elastic Beanstalk application owning the environments
        environment_prefix: Prefix of PR environment names (``<prefix>-<pr>``)
        aws: AWS platform settings
        github: GitHub repository settings
        log_url: Link to the invocation logs used in failure comments
        timeout: HTTP timeout for GitHub requests in seconds
    """

    model_config = ConfigDict(extra="forbid")

    application_name: str = Field(
        ..., min_length=1, description="Elastic Beanstalk application name"
    )
    environment_prefix: str = Field(
        default="pr", description="Prefix for per-PR environment names"
    )
    aws: AWSConfig = Field(..., description="AWS platform settings")
    github: GitHubConfig = Field(..., description="GitHub repository settings")
    log_url: str | None = Field(
        default=None, description="Link to the invocation logs"
    )
    timeout: float = Field(
        default=10.0, gt=0, le=120, description="GitHub request timeout in seconds"
    )

    @field_validator("environment_prefix")
    @classmethod
    def validate_environment_prefix(cls, v: str) -> str:
        """Validate prefix is usable in an environment name."""
        if not ENVIRONMENT_PREFIX_PATTERN.match(v):
            raise ValueError(
                f"Invalid environment prefix: {v}. "
                "Use letters, digits and hyphens only."
            )
        return v

    def resolved_log_url(self) -> str | None:
        """Return the explicit log URL or derive it from the workflow run."""
        if self.log_url:
            return self.log_url
        if self.github.run_id:
            server = self.github.server_url.rstrip("/")
            return f"{server}/{self.github.repository}/actions/runs/{self.github.run_id}"
        return None
