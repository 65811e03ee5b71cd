"""Supersede-and-cancel coordination between invocations.

Invocations are keyed the same way as the workflow's concurrency group. A
newer invocation for a key cancels the one in flight and waits for it to let
go of the key, so at most one invocation per key touches the environment at
a time and the last trigger wins.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TypeVar

from previewctl.lib.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def concurrency_key(
    workflow: str,
    ref: str,
    cloud_environment: str,
    platform_environment: str,
) -> str:
    """Build the key serializing invocations against one environment."""
    return f"{workflow}-{ref}-{cloud_environment}-{platform_environment}"


class InvocationCancelled(Exception):
    """Raised inside an invocation once a newer one has superseded it."""


class CancellationToken:
    """Cooperative cancellation flag checked between controller steps."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise InvocationCancelled if this token has been cancelled."""
        if self._event.is_set():
            raise InvocationCancelled()


class ConcurrencyGroups:
    """Registry of in-flight invocations, one per concurrency key."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._key_locks: dict[str, threading.Lock] = {}
        self._tokens: dict[str, CancellationToken] = {}

    def acquire(self, key: str, timeout: float | None = None) -> CancellationToken:
        """Claim ``key``, cancelling and waiting out any invocation holding it.

        Args:
            key: Concurrency key
            timeout: Seconds to wait for the previous holder, None for no limit

        Returns:
            Token for the new invocation

        Raises:
            TimeoutError: If the previous holder does not release in time
        """
        token = CancellationToken()
        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())
            previous = self._tokens.get(key)
            self._tokens[key] = token
            if previous is not None:
                logger.info(f"Superseding in-flight invocation for {key}")
                previous.cancel()

        acquired = key_lock.acquire(timeout=-1 if timeout is None else timeout)
        if not acquired:
            with self._lock:
                if self._tokens.get(key) is token:
                    del self._tokens[key]
            raise TimeoutError(f"Timed out waiting for concurrency group {key}")
        if token.cancelled:
            key_lock.release()
            raise InvocationCancelled()
        return token

    def release(self, key: str, token: CancellationToken) -> None:
        """Release ``key`` held by the invocation owning ``token``."""
        with self._lock:
            if self._tokens.get(key) is token:
                del self._tokens[key]
            key_lock = self._key_locks[key]
        key_lock.release()

    def run(
        self, key: str, fn: Callable[[CancellationToken], T], timeout: float | None = None
    ) -> T:
        """Run ``fn`` while holding ``key``, passing it the invocation's token."""
        token = self.acquire(key, timeout=timeout)
        try:
            return fn(token)
        finally:
            self.release(key, token)
