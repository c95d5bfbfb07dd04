import time

from httpctx.cancellation import (
    CANCELLED,
    DEADLINE_EXCEEDED,
    background,
    with_cancel,
    with_deadline,
    with_timeout,
)
from httpctx.errors import CancelledError, DeadlineExceededError


def test_background_signal_never_fires() -> None:
    signal = background()
    assert signal.wait(0.01) is False
    assert signal.fired is False
    assert signal.error() is None


def test_cancel_is_idempotent() -> None:
    signal = with_cancel()
    calls: list[str] = []
    signal.add_done_callback(lambda s: calls.append(s.reason or ""))

    signal.cancel()
    signal.cancel()

    assert signal.fired is True
    assert signal.reason == CANCELLED
    assert calls == [CANCELLED]
    assert type(signal.error()) is CancelledError


def test_timeout_fires_with_deadline_reason() -> None:
    signal = with_timeout(0.02)
    assert signal.wait(1.0) is True
    assert signal.reason == DEADLINE_EXCEEDED
    assert isinstance(signal.error(), DeadlineExceededError)


def test_cancel_after_deadline_keeps_first_reason() -> None:
    signal = with_deadline(time.monotonic() - 1)
    signal.cancel()
    assert signal.reason == DEADLINE_EXCEEDED


def test_parent_cancellation_propagates_to_child() -> None:
    parent = with_cancel()
    child = with_timeout(10.0, parent)
    parent.cancel()
    assert child.fired is True
    assert child.reason == CANCELLED


def test_child_cancellation_leaves_parent_alone() -> None:
    parent = with_cancel()
    child = with_cancel(parent)
    child.cancel()
    assert child.fired is True
    assert parent.fired is False
    assert parent.remove_done_callback(child._follow_parent) is False


def test_child_inherits_earlier_parent_deadline() -> None:
    parent = with_timeout(0.01)
    child = with_timeout(10.0, parent)
    assert child.deadline == parent.deadline
    assert child.wait(1.0) is True
    assert child.reason == DEADLINE_EXCEEDED


def test_callback_registered_after_firing_runs_immediately() -> None:
    signal = with_cancel()
    signal.cancel()
    seen: list[bool] = []
    signal.add_done_callback(lambda s: seen.append(s.fired))
    assert seen == [True]
