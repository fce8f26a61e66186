"""Tests for the keystroke counter and tracking flag."""

import pytest

from keytally.core.editor_host import TextDelta
from keytally.core.session_state import SessionState, SessionStateManager


def deltas(*lengths):
    return [TextDelta(inserted_length=n) for n in lengths]


@pytest.fixture
def manager():
    return SessionStateManager(SessionState(tracking_enabled=True))


@pytest.mark.parametrize("events", [
    [],
    [[1]],
    [[1], [1], [1]],
    [[3, 4], [0], [10, 1, 2]],
    [[5], [2, 2, 2, 2]],
])
def test_total_equals_sum_of_inserted_lengths(manager, events):
    for lengths in events:
        manager.record_change(deltas(*lengths))
    assert manager.total_keystrokes == sum(sum(lengths) for lengths in events)


def test_change_ignored_while_tracking_disabled():
    manager = SessionStateManager()
    assert manager.record_change(deltas(4)) is False
    assert manager.total_keystrokes == 0


def test_empty_event_is_noop(manager):
    emitted = []
    manager.state_changed.connect(lambda: emitted.append(True))

    assert manager.record_change([]) is False
    assert emitted == []


def test_deletion_counts_as_event_without_adding(manager):
    assert manager.record_change(deltas(0)) is True
    assert manager.total_keystrokes == 0


def test_one_state_change_per_event_not_per_delta(manager):
    emitted = []
    manager.state_changed.connect(lambda: emitted.append(True))

    manager.record_change(deltas(1, 2, 3))
    assert len(emitted) == 1


@pytest.mark.parametrize("tracking", [True, False])
def test_reset_always_zeroes(tracking):
    manager = SessionStateManager(SessionState(total_keystrokes=42, tracking_enabled=tracking))
    manager.reset()
    assert manager.total_keystrokes == 0
    assert manager.tracking_enabled is tracking


def test_reset_at_zero_is_harmless():
    manager = SessionStateManager()
    manager.reset()
    assert manager.total_keystrokes == 0


@pytest.mark.parametrize("initial", [True, False])
def test_toggle_is_its_own_inverse(initial):
    manager = SessionStateManager(SessionState(tracking_enabled=initial))
    assert manager.toggle_tracking() is (not initial)
    assert manager.toggle_tracking() is initial
    assert manager.tracking_enabled is initial


def test_start_tracking_is_idempotent():
    manager = SessionStateManager()
    emitted = []
    manager.state_changed.connect(lambda: emitted.append(True))

    assert manager.start_tracking() is True
    assert manager.start_tracking() is False
    assert manager.tracking_enabled is True
    assert len(emitted) == 1


def test_set_tracking_always_notifies(manager):
    emitted = []
    manager.state_changed.connect(lambda: emitted.append(True))

    manager.set_tracking(True)
    manager.set_tracking(False)
    assert len(emitted) == 2
    assert manager.get_session_info() == {"total_keystrokes": 0, "tracking_enabled": False}
