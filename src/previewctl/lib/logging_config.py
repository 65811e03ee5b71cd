"""Logging configuration for previewctl.

All modules obtain loggers through ``get_logger(__name__)`` so that the CLI
can configure the whole ``previewctl`` hierarchy in one place.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Chatty third-party loggers held at WARNING unless verbose
NOISY_LOGGERS = ("botocore", "boto3", "urllib3", "s3transfer")


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the root previewctl logger.

    Args:
        verbose: Enable DEBUG output, including third-party libraries
        quiet: Only emit WARNING and above
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger("previewctl")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a previewctl module."""
    return logging.getLogger(name)
