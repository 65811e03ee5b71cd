"""CLI commands for tearing down preview environments.

Implements ``previewctl destroy`` for running the lifecycle controller on a
GitHub Actions event, and ``previewctl status`` for inspecting a PR's
environment without changing anything.
"""

from __future__ import annotations

import sys
from collections.abc import Generator
from contextlib import contextmanager

import click

from previewctl.config.env_loader import get_env_var
from previewctl.config.loader import ConfigLoader
from previewctl.deploy.concurrency import ConcurrencyGroups, concurrency_key
from previewctl.deploy.controller import LifecycleController, should_terminate
from previewctl.deploy.naming import environment_name_for
from previewctl.deploy.platforms import create_platform
from previewctl.deploy.records import DeploymentRecordLocator
from previewctl.deploy.reporter import NotificationReporter
from previewctl.deploy.triggers import load_event
from previewctl.github.client import GitHubClient
from previewctl.lib.errors import ConfigError, PreviewCtlError, ValidationError
from previewctl.lib.logging_config import get_logger, setup_logging
from previewctl.models.config import ControllerConfig
from previewctl.models.invocation import ControllerState, InvocationResult
from previewctl.models.trigger import TerminationRequest, TriggerKind

logger = get_logger(__name__)

# In-process concurrency groups shared by every invocation in this process
_GROUPS = ConcurrencyGroups()


@contextmanager
def handle_cli_errors() -> Generator[None, None, None]:
    """Context manager for consistent error handling in CLI commands.

    Exit codes:
        2: Configuration or payload validation error
        3: Controller/platform error
    """
    try:
        yield
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        click.secho("Error: Configuration error", fg="red", err=True)
        click.echo(f"  {e.message}", err=True)
        sys.exit(2)
    except ValidationError as e:
        logger.error(f"Validation error: {e}")
        click.secho("Error: Invalid event payload", fg="red", err=True)
        click.echo(f"  {e.message}", err=True)
        sys.exit(2)
    except PreviewCtlError as e:
        logger.error(f"previewctl error: {e}")
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(3)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(3)


def build_controller(config: ControllerConfig) -> LifecycleController:
    """Wire a LifecycleController from configuration."""
    github = GitHubClient(config.github, timeout=config.timeout)
    return LifecycleController(
        application_name=config.application_name,
        platform=create_platform(config),
        github=github,
        locator=DeploymentRecordLocator(
            github, environment=config.github.deployment_environment
        ),
        reporter=NotificationReporter(github),
        log_url=config.resolved_log_url(),
    )


@click.command()
@click.option(
    "--event-name",
    envvar="GITHUB_EVENT_NAME",
    default=None,
    help="Webhook event name (defaults to $GITHUB_EVENT_NAME)",
)
@click.option(
    "--event-path",
    envvar="GITHUB_EVENT_PATH",
    type=click.Path(),
    default=None,
    help="Webhook payload file (defaults to $GITHUB_EVENT_PATH)",
)
@click.option(
    "--pr",
    "pr_number",
    type=click.IntRange(min=1),
    default=None,
    help="Destroy the environment of this pull request, ignoring any event",
)
@click.option(
    "--head-ref",
    default=None,
    help="Head branch of --pr (looked up from GitHub when omitted)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Suppress progress output")
def destroy(
    event_name: str | None,
    event_path: str | None,
    pr_number: int | None,
    head_ref: str | None,
    config_path: str | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Terminate the preview environment of a pull request.

    Reads the GitHub Actions event that triggered the workflow and acts on a
    `/destroy` comment on an open pull request or on a closed pull request.
    Other events are ignored.

    Example:

        previewctl destroy

        previewctl destroy --pr 42 --config previewctl.yaml
    """
    setup_logging(verbose=verbose, quiet=quiet)

    with handle_cli_errors():
        request = _build_request(event_name, event_path, pr_number, head_ref)
        if request is None:
            if not quiet:
                click.echo("Event does not request environment teardown; ignoring.")
            return

        config = ConfigLoader().load(config_path)
        controller = build_controller(config)

        key = concurrency_key(
            get_env_var("GITHUB_WORKFLOW") or "previewctl",
            # Every trigger kind for one PR maps to the same key
            f"pull/{request.pr_number}",
            config.application_name,
            environment_name_for(config.environment_prefix, request.pr_number),
        )
        result = _GROUPS.run(key, lambda token: controller.handle(request, token))

        _display_result(result, quiet)
        if result.state is ControllerState.FAILED:
            sys.exit(3)


@click.command()
@click.option(
    "--pr",
    "pr_number",
    type=click.IntRange(min=1),
    required=True,
    help="Pull request number",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only print the status")
def status(pr_number: int, config_path: str | None, verbose: bool, quiet: bool) -> None:
    """Show the preview environment status of a pull request."""
    setup_logging(verbose=verbose, quiet=quiet)

    with handle_cli_errors():
        config = ConfigLoader().load(config_path)
        platform = create_platform(config)

        environment_name = platform.resolve_environment_name(
            config.application_name, pr_number
        )
        env_status = None
        if environment_name is not None:
            env_status = platform.get_status(config.application_name, environment_name)

        status_text = env_status.value if env_status else "absent"
        destroyable = should_terminate(environment_name, env_status)
        if quiet:
            click.echo(status_text)
            return

        click.echo()
        click.secho("Environment Status", bold=True)
        click.echo(f"  Application:  {config.application_name}")
        click.echo(f"  Environment:  {environment_name or '(none)'}")
        click.echo(f"  Status:       {status_text}")
        click.echo(f"  Destroyable:  {'yes' if destroyable else 'no'}")
        click.echo()


def _build_request(
    event_name: str | None,
    event_path: str | None,
    pr_number: int | None,
    head_ref: str | None,
) -> TerminationRequest | None:
    if pr_number is not None:
        return TerminationRequest(
            pr_number=pr_number,
            trigger_kind=TriggerKind.EXPLICIT_COMMENT,
            head_ref=head_ref,
        )

    if not event_name or not event_path:
        raise ConfigError(
            field="event",
            message=(
                "No event to process. Pass --pr, or run inside GitHub Actions "
                "with GITHUB_EVENT_NAME and GITHUB_EVENT_PATH set."
            ),
        )
    return load_event(event_name, event_path)


def _display_result(result: InvocationResult, quiet: bool) -> None:
    if quiet:
        click.echo(result.state.value)
        return

    colors = {
        ControllerState.DONE: "green",
        ControllerState.NOOP_TERMINATED: "yellow",
        ControllerState.SUPERSEDED: "yellow",
        ControllerState.FAILED: "red",
    }
    click.echo()
    click.secho(
        f"Invocation {result.state.value}",
        fg=colors.get(result.state),
        bold=True,
    )
    click.echo(f"  Pull request:  #{result.request.pr_number}")
    click.echo(f"  Trigger:       {result.request.trigger_kind.value}")
    click.echo(f"  Environment:   {result.environment_name or '(none)'}")
    if result.status:
        click.echo(f"  Status:        {result.status.value}")
    if result.record_id is not None:
        click.echo(f"  Deployment:    {result.record_id}")
    for outcome in result.advisory:
        mark = "ok" if outcome.ok else f"failed ({outcome.error})"
        click.echo(f"  {outcome.step}:  {mark}")
    if result.error:
        click.echo(f"  Error:         {result.error}")
    click.echo()
