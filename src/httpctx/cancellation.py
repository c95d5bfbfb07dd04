"""One-shot cancellation signals with optional deadlines.

A :class:`Signal` fires at most once, either because :meth:`Signal.cancel`
was called or because its deadline passed. The first reason wins and firing
again is a no-op. Signals derived from a parent fire when the parent fires,
carrying the parent's reason; firing a child leaves the parent untouched.

Typical use::

    signal = with_timeout(2.5)
    client.get(signal, "https://example.com/api", into=dict)
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Literal

from .errors import CancelledError, DeadlineExceededError

Reason = Literal["cancelled", "deadline_exceeded"]

CANCELLED: Reason = "cancelled"
DEADLINE_EXCEEDED: Reason = "deadline_exceeded"

DoneCallback = Callable[["Signal"], None]


class Signal:
    """Externally triggerable, permanent cancellation event."""

    def __init__(self, *, deadline: float | None = None, parent: "Signal | None" = None) -> None:
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._deadline = deadline
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: Reason | None = None
        self._callbacks: list[DoneCallback] = []
        self._timer: threading.Timer | None = None
        self._parent = parent

        if parent is not None:
            parent.add_done_callback(self._follow_parent)

        if deadline is not None and not self.fired:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                self._fire(DEADLINE_EXCEEDED)
            else:
                self._timer = threading.Timer(remaining, self._fire, args=(DEADLINE_EXCEEDED,))
                self._timer.daemon = True
                self._timer.start()

    @property
    def deadline(self) -> float | None:
        """Deadline on the ``time.monotonic`` clock, if any."""
        return self._deadline

    @property
    def fired(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Reason | None:
        return self._reason

    def cancel(self) -> None:
        self._fire(CANCELLED)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the signal fires; returns whether it has fired."""
        return self._event.wait(timeout)

    def error(self) -> CancelledError | None:
        """The exception describing why the signal fired, or ``None`` if it has not."""
        if self._reason == DEADLINE_EXCEEDED:
            return DeadlineExceededError()
        if self._reason == CANCELLED:
            return CancelledError()
        return None

    def add_done_callback(self, callback: DoneCallback) -> None:
        """Run ``callback(signal)`` once the signal fires; immediately if it already has."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback(self)

    def remove_done_callback(self, callback: DoneCallback) -> bool:
        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                return False
            return True

    def _follow_parent(self, parent: "Signal") -> None:
        self._fire(parent.reason or CANCELLED)

    def _fire(self, reason: Reason) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
            timer, self._timer = self._timer, None
            parent, self._parent = self._parent, None

        if timer is not None:
            timer.cancel()
        if parent is not None:
            parent.remove_done_callback(self._follow_parent)
        for callback in callbacks:
            callback(self)

    def __repr__(self) -> str:
        state = self._reason or "pending"
        return f"<Signal {state} deadline={self._deadline!r}>"


def background() -> Signal:
    """A signal nobody holds a reference to cancel; it never fires on its own."""
    return Signal()


def with_cancel(parent: Signal | None = None) -> Signal:
    """Derive a signal the caller fires with :meth:`Signal.cancel`.

    Cancelling a derived signal once it is no longer needed also detaches it
    from its parent and stops its deadline timer.
    """
    return Signal(parent=parent)


def with_deadline(deadline: float, parent: Signal | None = None) -> Signal:
    """Derive a signal that fires at ``deadline`` (``time.monotonic`` clock)."""
    return Signal(deadline=deadline, parent=parent)


def with_timeout(timeout: float, parent: Signal | None = None) -> Signal:
    """Derive a signal that fires ``timeout`` seconds from now."""
    return with_deadline(time.monotonic() + timeout, parent)


__all__ = [
    "CANCELLED",
    "DEADLINE_EXCEEDED",
    "Reason",
    "Signal",
    "background",
    "with_cancel",
    "with_deadline",
    "with_timeout",
]
