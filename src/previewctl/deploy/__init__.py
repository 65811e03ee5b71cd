"""previewctl teardown engine.

This package provides the lifecycle controller for per-pull-request preview
environments together with its collaborators: the environment platform, the
deployment record locator, the notification reporter, trigger parsing and
concurrency coordination.
"""

from previewctl.deploy.concurrency import (
    CancellationToken,
    ConcurrencyGroups,
    InvocationCancelled,
    concurrency_key,
)
from previewctl.deploy.controller import LifecycleController, should_terminate
from previewctl.deploy.naming import environment_name_for, make_namer
from previewctl.deploy.records import DeploymentRecordLocator
from previewctl.deploy.reporter import NotificationReporter
from previewctl.deploy.triggers import load_event, parse_event

__all__ = [
    "CancellationToken",
    "ConcurrencyGroups",
    "DeploymentRecordLocator",
    "InvocationCancelled",
    "LifecycleController",
    "NotificationReporter",
    "concurrency_key",
    "environment_name_for",
    "load_event",
    "make_namer",
    "parse_event",
    "should_terminate",
]
