"""Translate GitHub Actions events into termination requests.

Only two events start the workflow: a ``/destroy`` comment on an open pull
request and the closing of a pull request. Everything else maps to ``None``,
which callers treat as a no-op rather than an error.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from previewctl.config.validator import flatten_pydantic_errors
from previewctl.lib.errors import ConfigError, ValidationError
from previewctl.lib.logging_config import get_logger
from previewctl.models.trigger import (
    CommentCreatedEvent,
    PullRequestClosedEvent,
    TerminationRequest,
    TriggerKind,
)

logger = get_logger(__name__)

ISSUE_COMMENT_EVENT = "issue_comment"
PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")


def request_from_comment(event: CommentCreatedEvent) -> TerminationRequest | None:
    """Return a request when the comment is ``/destroy`` on an open PR."""
    if not event.requests_destroy:
        return None
    return TerminationRequest(
        pr_number=event.issue_number,
        trigger_kind=TriggerKind.EXPLICIT_COMMENT,
    )


def request_from_closed(event: PullRequestClosedEvent) -> TerminationRequest:
    """Return the request for a closed pull request."""
    return TerminationRequest(
        pr_number=event.pr_number,
        trigger_kind=TriggerKind.PR_CLOSED,
        head_ref=event.head_ref,
    )


def parse_event(event_name: str, payload: dict[str, Any]) -> TerminationRequest | None:
    """Map a webhook event name and payload to a request.

    Args:
        event_name: Value of ``GITHUB_EVENT_NAME``
        payload: Decoded webhook payload

    Returns:
        TerminationRequest, or None for events that do not trigger teardown

    Raises:
        ValidationError: If a recognised event has a malformed payload
    """
    action = payload.get("action")

    if event_name == ISSUE_COMMENT_EVENT and action == "created":
        issue = payload.get("issue") or {}
        comment = payload.get("comment") or {}
        event = _validate(
            CommentCreatedEvent,
            {
                "issue_number": issue.get("number"),
                "is_pull_request": bool(issue.get("pull_request")),
                "pr_state": issue.get("state"),
                "comment_body": comment.get("body"),
            },
        )
        request = request_from_comment(event)
        if request is None:
            logger.debug(f"Ignoring comment on #{event.issue_number}")
        return request

    if event_name in PULL_REQUEST_EVENTS and action == "closed":
        pull_request = payload.get("pull_request") or {}
        event = _validate(
            PullRequestClosedEvent,
            {
                "pr_number": pull_request.get("number") or payload.get("number"),
                "head_ref": (pull_request.get("head") or {}).get("ref"),
            },
        )
        return request_from_closed(event)

    logger.debug(f"Ignoring event {event_name} (action={action})")
    return None


def load_event(event_name: str, event_path: str) -> TerminationRequest | None:
    """Read the webhook payload file written by the Actions runner.

    Raises:
        ConfigError: If the file cannot be read or is not JSON
        ValidationError: If a recognised event has a malformed payload
    """
    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError("event_path", f"Cannot read event file {event_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError("event_path", f"Event file {event_path} is not JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ConfigError("event_path", f"Event file {event_path} is not an object")
    return parse_event(event_name, payload)


def _validate(model: type[Any], data: dict[str, Any]) -> Any:
    try:
        return model(**data)
    except PydanticValidationError as e:
        raise ValidationError(
            field=model.__name__,
            message="; ".join(flatten_pydantic_errors(e)),
            expected=f"a valid {model.__name__} payload",
            actual=repr(data),
        ) from e
