"""Real-time remote persistence adapter over a document store."""

import logging
import threading
from typing import Any, Optional

from pocketledger.core.exceptions import PersistenceError
from pocketledger.domain.models import LedgerState
from pocketledger.repositories.protocols import (
    Document,
    DocumentStore,
    StateListener,
    Unsubscribe,
)
from pocketledger.repositories.wire import (
    AccountWire,
    CategoryWire,
    LedgerStateWire,
    TransactionWire,
)

logger = logging.getLogger(__name__)


class RealtimeDocumentAdapter:
    """
    Persistence adapter for the real-time remote deployment.

    Layout per user:
    - ``users/{uid}`` holds ``{"accounts": [...], "categories": [...]}``
    - ``users/{uid}/transactions/{txId}`` holds one transaction each

    A persist writes the changed transaction documents and then the user
    document. The two writes are not atomic and concurrent writers are
    resolved last-writer-wins per document.
    """

    def __init__(self, store: DocumentStore, user_id: str):
        self._store = store
        self._user_path = ("users", user_id)
        self._tx_collection = ("users", user_id, "transactions")
        self._subscriptions: list[Unsubscribe] = []

    def load(self) -> LedgerState:
        try:
            user_doc = self._store.get(self._user_path) or {}
            tx_docs = self._store.list(self._tx_collection)
        except Exception as exc:
            raise PersistenceError(f"Failed to load remote ledger: {exc}") from exc
        return self._compose(user_doc, tx_docs)

    def persist(self, state: LedgerState) -> None:
        try:
            existing = self._store.list(self._tx_collection)
            wanted = {tx.id: TransactionWire.from_domain(tx).to_document() for tx in state.transactions}

            for tx_id, doc in wanted.items():
                if existing.get(tx_id) != doc:
                    self._store.set(self._tx_path(tx_id), doc)
            for tx_id in existing.keys() - wanted.keys():
                self._store.delete(self._tx_path(tx_id))

            self._store.set(
                self._user_path,
                {
                    "accounts": [AccountWire.from_domain(a).to_document() for a in state.accounts],
                    "categories": [CategoryWire.from_domain(c).to_document() for c in state.categories],
                },
                merge=True,
            )
        except PersistenceError:
            raise
        except Exception as exc:
            raise PersistenceError(f"Failed to write remote ledger: {exc}") from exc

    def subscribe(self, on_change: StateListener) -> Unsubscribe:
        lock = threading.Lock()
        latest: dict[str, Any] = {"user": None, "transactions": None}

        def emit() -> None:
            with lock:
                user_doc = latest["user"]
                tx_docs = latest["transactions"]
            # Nothing to report until the user document exists
            if user_doc is None or tx_docs is None:
                return
            on_change(self._compose(user_doc, tx_docs))

        def on_user(doc: Optional[Document]) -> None:
            with lock:
                latest["user"] = doc
            emit()

        def on_transactions(docs: dict[str, Document]) -> None:
            with lock:
                latest["transactions"] = docs
            emit()

        unsub_txs = self._store.watch_collection(self._tx_collection, on_transactions)
        unsub_user = self._store.watch_document(self._user_path, on_user)

        def unsubscribe() -> None:
            unsub_user()
            unsub_txs()
            if unsubscribe in self._subscriptions:
                self._subscriptions.remove(unsubscribe)

        self._subscriptions.append(unsubscribe)
        return unsubscribe

    def close(self) -> None:
        for unsubscribe in list(self._subscriptions):
            unsubscribe()

    def _tx_path(self, tx_id: str) -> tuple[str, ...]:
        return self._tx_collection + (tx_id,)

    @staticmethod
    def _compose(user_doc: Document, tx_docs: dict[str, Document]) -> LedgerState:
        wire = LedgerStateWire.model_validate(
            {
                "accounts": user_doc.get("accounts", []),
                "categories": user_doc.get("categories", []),
                "transactions": list(tx_docs.values()),
            }
        )
        state = wire.to_domain()
        state.transactions.sort(key=lambda tx: (tx.date, tx.id), reverse=True)
        return state
