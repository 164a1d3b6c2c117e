"""Persistence adapter protocol."""

from typing import Callable, Protocol

from pocketledger.domain.models import LedgerState

StateListener = Callable[[LedgerState], None]
Unsubscribe = Callable[[], None]


class PersistenceAdapter(Protocol):
    """
    Interface every backing store exposes to the ledger service.

    Implementations raise ``PersistenceError`` when the store rejects a read
    or a write.
    """

    def load(self) -> LedgerState:
        """One-shot read of the full ledger state."""
        ...

    def persist(self, state: LedgerState) -> None:
        """Durably write the full current state."""
        ...

    def subscribe(self, on_change: StateListener) -> Unsubscribe:
        """Push live updates; stores without them return a no-op unsubscribe."""
        ...

    def close(self) -> None:
        """Release connections and cancel subscriptions."""
        ...
