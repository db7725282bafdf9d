"""Cancellation, inter-call pacing and ordering helpers for batch actions.

Batch actions are strictly sequential. Between two mutating calls the
orchestrator asks a ``Pacer`` to pause; the pacer must honour the caller's
``CancellationToken`` so a cancelled run stops before the next API call.
"""

import random
import threading
from collections.abc import Callable, Sequence
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")

Permutation = Callable[[Sequence[T]], list[T]]
"""Returns a reordered copy of its input; injected so ordering is testable."""


class OperationCancelledError(Exception):
    """Raised when a ``CancellationToken`` is cancelled mid-operation."""


class CancellationToken:
    """Cooperative cancellation signal shared by one invocation.

    Wraps a ``threading.Event`` so that another thread (or a signal handler)
    can cancel a running batch while it is waiting between actions.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled")

    def wait(self, seconds: float) -> bool:
        """Block for up to ``seconds``; returns True if cancelled meanwhile."""
        return self._event.wait(timeout=seconds)


def ensure_token(cancellation: CancellationToken | None) -> CancellationToken:
    """Return ``cancellation`` or a fresh token that is never cancelled."""
    return cancellation if cancellation is not None else CancellationToken()


@runtime_checkable
class Pacer(Protocol):
    """Policy for waiting between successive mutating API calls."""

    def pause(self, seconds: float, cancellation: CancellationToken) -> None:
        """Wait before the next call, raising if cancelled while waiting."""
        ...


class FixedDelayPacer:
    """Waits exactly the requested delay; zero or negative skips the wait."""

    def pause(self, seconds: float, cancellation: CancellationToken) -> None:
        cancellation.raise_if_cancelled()
        if seconds <= 0:
            return
        if cancellation.wait(seconds):
            raise OperationCancelledError("Operation was cancelled during delay")


class NoDelayPacer:
    """Never waits; still observes cancellation. Used for dry runs and tests."""

    def pause(self, seconds: float, cancellation: CancellationToken) -> None:
        cancellation.raise_if_cancelled()


def shuffled(items: Sequence[T]) -> list[T]:
    """Unseeded random permutation of ``items``."""
    return random.sample(list(items), len(items))
