"""Base interface for environment platforms."""

from __future__ import annotations

from abc import ABC, abstractmethod

from previewctl.models.environment import EnvironmentStatus, TerminationAck


class BaseEnvironmentPlatform(ABC):
    """Abstract base class for platforms hosting per-PR environments.

    Implementations hold no state between calls; every method is a round
    trip to the platform.
    """

    @abstractmethod
    def resolve_environment_name(
        self, application_name: str, pr_number: int
    ) -> str | None:
        """Return the name of the environment for a pull request, if it exists.

        Args:
            application_name: Parent application name.
            pr_number: Pull request number the environment was created for.

        Returns:
            Environment name, or None when no matching environment exists.

        Raises:
            DeploymentError: If the platform cannot be queried.
        """

    @abstractmethod
    def get_status(
        self, application_name: str, environment_name: str
    ) -> EnvironmentStatus | None:
        """Return the current lifecycle status of an environment.

        Args:
            application_name: Parent application name.
            environment_name: Environment to inspect.

        Returns:
            Current status, or None when the environment no longer exists.

        Raises:
            DeploymentError: If the platform cannot be queried.
        """

    @abstractmethod
    def terminate(self, environment_name: str, force: bool = True) -> TerminationAck:
        """Issue an asynchronous termination command.

        Args:
            environment_name: Environment to terminate.
            force: Terminate even if the environment is mid-update.

        Returns:
            Acknowledgement from the platform; termination continues in the
            background.

        Raises:
            DeploymentError: If the command is rejected or cannot be sent.
        """
