"""Transient status messages with single-level undo."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from pocketledger.domain.models import Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """A status message; ``undoable`` is True while an undo snapshot is held."""

    message: str
    undoable: bool = False


NotificationListener = Callable[[Notification], None]


class NotificationCenter:
    """
    Holds the visible notification and the pending undo snapshot.

    State machine: ``Idle -> Pending(snapshot, message) -> Idle`` either when
    the auto-dismiss timeout elapses or when the snapshot is taken for undo.
    Only the most recent mutation is undoable. With
    ``keep_undo_after_dismiss`` the snapshot outlives the visible message.
    """

    def __init__(
        self,
        auto_dismiss_ms: int = 5000,
        keep_undo_after_dismiss: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._auto_dismiss = auto_dismiss_ms / 1000
        self._keep_undo = keep_undo_after_dismiss
        self._clock = clock
        self._lock = threading.Lock()
        self._message: Optional[str] = None
        self._shown_at: Optional[float] = None
        self._snapshot: Optional[Snapshot] = None
        self._listeners: list[NotificationListener] = []

    def subscribe(self, listener: NotificationListener) -> Callable[[], None]:
        """Register a listener for every emitted notification."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def push(self, message: str, snapshot: Snapshot) -> None:
        """Enter Pending, replacing any earlier snapshot."""
        with self._lock:
            self._message = message
            self._shown_at = self._clock()
            self._snapshot = snapshot
        self._emit(Notification(message, undoable=True))

    def notify(self, message: str) -> None:
        """Show a message that carries no undo capability."""
        with self._lock:
            self._message = message
            self._shown_at = self._clock()
        self._emit(Notification(message, undoable=self._snapshot is not None))

    def current(self) -> Optional[Notification]:
        """Return the visible notification, dismissing it once expired."""
        with self._lock:
            self._expire()
            if self._message is None:
                return None
            return Notification(self._message, undoable=self._snapshot is not None)

    @property
    def has_pending_undo(self) -> bool:
        with self._lock:
            self._expire()
            return self._snapshot is not None

    def take_undo(self) -> Optional[Snapshot]:
        """Return the pending snapshot and go back to Idle."""
        with self._lock:
            self._expire()
            snapshot = self._snapshot
            self._snapshot = None
            self._message = None
            self._shown_at = None
        return snapshot

    def dismiss(self) -> None:
        """Hide the visible message as if its timeout elapsed."""
        with self._lock:
            self._clear_visible()

    def clear(self) -> None:
        """Drop both the message and any pending snapshot."""
        with self._lock:
            self._message = None
            self._shown_at = None
            self._snapshot = None

    def _expire(self) -> None:
        if self._shown_at is None:
            return
        if self._clock() - self._shown_at >= self._auto_dismiss:
            self._clear_visible()

    def _clear_visible(self) -> None:
        self._message = None
        self._shown_at = None
        if not self._keep_undo:
            self._snapshot = None

    def _emit(self, notification: Notification) -> None:
        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception:
                logger.exception("Notification listener failed")
