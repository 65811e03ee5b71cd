"""Naming convention for per-pull-request environments."""

from __future__ import annotations

from collections.abc import Callable

DEFAULT_PREFIX = "pr"

# Maps a pull request number to its environment name
EnvironmentNamer = Callable[[int], str]


def environment_name_for(prefix: str, pr_number: int) -> str:
    """Return the environment name for a pull request, e.g. ``pr-42``.

    Raises:
        ValueError: If the PR number is not positive
    """
    if pr_number < 1:
        raise ValueError(f"Pull request number must be positive, got {pr_number}")
    return f"{prefix}-{pr_number}"


def make_namer(prefix: str = DEFAULT_PREFIX) -> EnvironmentNamer:
    """Bind a prefix into a namer suitable for injection into a platform."""

    def _namer(pr_number: int) -> str:
        return environment_name_for(prefix, pr_number)

    return _namer
