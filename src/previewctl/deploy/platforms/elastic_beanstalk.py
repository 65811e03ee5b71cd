"""AWS Elastic Beanstalk environment platform."""

from __future__ import annotations

from typing import Any

from previewctl.deploy.naming import EnvironmentNamer, make_namer
from previewctl.deploy.platforms.base import BaseEnvironmentPlatform
from previewctl.lib.errors import CloudSDKNotInstalledError, DeploymentError
from previewctl.lib.logging_config import get_logger
from previewctl.models.config import AWSConfig
from previewctl.models.environment import (
    Environment,
    EnvironmentStatus,
    TerminationAck,
)

logger = get_logger(__name__)


class ElasticBeanstalkPlatform(BaseEnvironmentPlatform):
    """Query and terminate per-PR Elastic Beanstalk environments."""

    def __init__(
        self,
        config: AWSConfig,
        namer: EnvironmentNamer | None = None,
        client: Any | None = None,
    ) -> None:
        """Initialize the Elastic Beanstalk platform.

        Args:
            config: AWS region and profile settings
            namer: Maps a PR number to an environment name
            client: Pre-built boto3 elasticbeanstalk client

        Raises:
            CloudSDKNotInstalledError: If boto3 is not installed
        """
        try:
            import boto3
            from botocore.exceptions import BotoCoreError, ClientError
        except ImportError as exc:
            raise CloudSDKNotInstalledError(provider="aws", sdk_name="boto3") from exc

        self._config = config
        self._namer = namer or make_namer()
        self._sdk_errors: tuple[type[Exception], ...] = (BotoCoreError, ClientError)
        if client is None:
            session = boto3.session.Session(
                profile_name=config.profile, region_name=config.region
            )
            client = session.client("elasticbeanstalk")
        self._client = client

    def resolve_environment_name(
        self, application_name: str, pr_number: int
    ) -> str | None:
        """Return the PR environment name if the platform knows about it."""
        candidate = self._namer(pr_number)
        environments = self._describe(application_name, candidate, operation="resolve")
        if not environments:
            logger.info(f"No environment named {candidate} in {application_name}")
            return None
        return candidate

    def get_status(
        self, application_name: str, environment_name: str
    ) -> EnvironmentStatus | None:
        """Return the status of the live incarnation, else the latest one."""
        environments = self._describe(
            application_name, environment_name, operation="status"
        )
        if not environments:
            return None

        for environment in environments:
            if environment.is_live:
                return environment.status
        return environments[0].status

    def terminate(self, environment_name: str, force: bool = True) -> TerminationAck:
        """Send a terminate command without waiting for completion."""
        try:
            response = self._client.terminate_environment(
                EnvironmentName=environment_name,
                ForceTerminate=force,
            )
        except self._sdk_errors as exc:
            raise DeploymentError(
                operation="terminate",
                message=f"Failed to terminate environment {environment_name}: {exc}",
            ) from exc

        # The command is already accepted; an unlisted echoed status is not fatal
        status: EnvironmentStatus | None = None
        if response.get("Status"):
            try:
                status = EnvironmentStatus(response["Status"])
            except ValueError:
                logger.warning(
                    f"Unrecognized status {response['Status']!r} "
                    f"acknowledging termination of {environment_name}"
                )
        return TerminationAck(
            environment_name=response.get("EnvironmentName") or environment_name,
            environment_id=response.get("EnvironmentId"),
            status=status,
        )

    def _describe(
        self, application_name: str, environment_name: str, operation: str
    ) -> list[Environment]:
        """Describe environments matching a name, including recently deleted ones."""
        try:
            response = self._client.describe_environments(
                ApplicationName=application_name,
                EnvironmentNames=[environment_name],
            )
        except self._sdk_errors as exc:
            raise DeploymentError(
                operation=operation,
                message=f"Failed to describe environment {environment_name}: {exc}",
            ) from exc

        environments: list[Environment] = []
        for item in response.get("Environments", []):
            try:
                status = EnvironmentStatus(item.get("Status"))
            except ValueError as exc:
                raise DeploymentError(
                    operation=operation,
                    message=(
                        f"Unrecognized status {item.get('Status')!r} "
                        f"for environment {environment_name}"
                    ),
                ) from exc
            environments.append(
                Environment(
                    application_name=item.get("ApplicationName") or application_name,
                    environment_name=item.get("EnvironmentName") or environment_name,
                    environment_id=item.get("EnvironmentId"),
                    status=status,
                    cname=item.get("CNAME"),
                )
            )
        return environments
