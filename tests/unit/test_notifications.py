"""
Unit tests for NotificationCenter.

Tests cover:
- Pending state and auto-dismiss
- Replacing the pending snapshot
- Keeping undo after dismissal
- Listener delivery
"""

from pocketledger.domain.models import LedgerState, Snapshot
from pocketledger.services import Notification, NotificationCenter
from tests.conftest import FakeClock, make_ledger_state


def _snapshot() -> Snapshot:
    return Snapshot.capture(make_ledger_state())


class TestPendingState:
    """Tests for the Idle -> Pending -> Idle cycle."""

    def test_push_enters_pending(self):
        center = NotificationCenter(clock=FakeClock())

        center.push("Entry saved", _snapshot())

        assert center.current() == Notification("Entry saved", undoable=True)
        assert center.has_pending_undo is True

    def test_auto_dismiss_after_timeout(self):
        """
        GIVEN a pending notification
        WHEN 5 seconds pass
        THEN the message and the snapshot are gone
        """
        clock = FakeClock()
        center = NotificationCenter(auto_dismiss_ms=5000, clock=clock)
        center.push("Entry saved", _snapshot())

        clock.advance(4)
        assert center.current() is not None

        clock.advance(1)
        assert center.current() is None
        assert center.take_undo() is None

    def test_newer_push_replaces_snapshot(self):
        center = NotificationCenter(clock=FakeClock())
        first, second = _snapshot(), Snapshot(transactions=[], accounts=[])

        center.push("Entry saved", first)
        center.push("Entry deleted", second)

        assert center.take_undo() is second
        assert center.take_undo() is None

    def test_take_undo_returns_to_idle(self):
        center = NotificationCenter(clock=FakeClock())
        snapshot = _snapshot()
        center.push("Entry saved", snapshot)

        assert center.take_undo() is snapshot
        assert center.current() is None
        assert center.has_pending_undo is False

    def test_keep_undo_after_dismiss(self):
        """
        GIVEN keep_undo_after_dismiss is enabled
        WHEN the message times out
        THEN the snapshot is still available
        """
        clock = FakeClock()
        center = NotificationCenter(keep_undo_after_dismiss=True, clock=clock)
        snapshot = _snapshot()
        center.push("Entry saved", snapshot)

        clock.advance(10)

        assert center.current() is None
        assert center.take_undo() is snapshot

    def test_notify_has_no_undo(self):
        center = NotificationCenter(clock=FakeClock())

        center.notify("Sync failed")

        assert center.current() == Notification("Sync failed", undoable=False)
        assert center.take_undo() is None

    def test_dismiss_and_clear(self):
        center = NotificationCenter(clock=FakeClock())
        center.push("Entry saved", _snapshot())

        center.dismiss()
        assert center.current() is None
        assert center.has_pending_undo is False

        center.push("Entry saved", Snapshot.capture(LedgerState()))
        center.clear()
        assert center.take_undo() is None


class TestListeners:
    """Tests for notification listeners."""

    def test_listener_receives_events(self):
        center = NotificationCenter(clock=FakeClock())
        seen = []
        unsubscribe = center.subscribe(seen.append)

        center.push("Entry saved", _snapshot())
        center.notify("Sync failed")
        unsubscribe()
        center.notify("ignored")

        assert seen == [
            Notification("Entry saved", undoable=True),
            Notification("Sync failed", undoable=True),
        ]

    def test_failing_listener_is_isolated(self):
        center = NotificationCenter(clock=FakeClock())
        seen = []

        def broken(notification):
            raise RuntimeError("boom")

        center.subscribe(broken)
        center.subscribe(seen.append)
        center.notify("hello")

        assert seen == [Notification("hello")]
