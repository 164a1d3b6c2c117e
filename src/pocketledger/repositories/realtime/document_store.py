"""In-process real-time document store."""

import copy
import logging
import threading
from collections import defaultdict
from typing import Callable, Optional

from pocketledger.repositories.protocols import CollectionListener, Document, DocumentListener

logger = logging.getLogger(__name__)

Path = tuple[str, ...]


class InMemoryDocumentStore:
    """
    Thread-safe document store with live listeners.

    Several ledger clients can share one instance to behave like devices
    connected to the same remote database. Listeners run synchronously on the
    writer's thread after the write is applied, and receive copies.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._docs: dict[Path, Document] = {}
        self._doc_watchers: dict[Path, list[DocumentListener]] = defaultdict(list)
        self._collection_watchers: dict[Path, list[CollectionListener]] = defaultdict(list)

    def get(self, path: Path) -> Optional[Document]:
        with self._lock:
            doc = self._docs.get(path)
            return copy.deepcopy(doc) if doc is not None else None

    def list(self, collection: Path) -> dict[str, Document]:
        with self._lock:
            return {
                path[-1]: copy.deepcopy(doc)
                for path, doc in self._docs.items()
                if path[:-1] == collection
            }

    def set(self, path: Path, data: Document, merge: bool = False) -> None:
        with self._lock:
            if merge and path in self._docs:
                updated = dict(self._docs[path])
                updated.update(copy.deepcopy(data))
            else:
                updated = copy.deepcopy(data)
            self._docs[path] = updated
        self._fire(path)

    def delete(self, path: Path) -> None:
        with self._lock:
            existed = self._docs.pop(path, None) is not None
        if existed:
            self._fire(path)

    def watch_document(self, path: Path, listener: DocumentListener) -> Callable[[], None]:
        with self._lock:
            self._doc_watchers[path].append(listener)
        listener(self.get(path))

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._doc_watchers[path]:
                    self._doc_watchers[path].remove(listener)

        return unsubscribe

    def watch_collection(self, collection: Path, listener: CollectionListener) -> Callable[[], None]:
        with self._lock:
            self._collection_watchers[collection].append(listener)
        listener(self.list(collection))

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._collection_watchers[collection]:
                    self._collection_watchers[collection].remove(listener)

        return unsubscribe

    def _fire(self, path: Path) -> None:
        with self._lock:
            doc_listeners = list(self._doc_watchers.get(path, []))
            collection_listeners = list(self._collection_watchers.get(path[:-1], []))

        if doc_listeners:
            doc = self.get(path)
            for listener in doc_listeners:
                listener(doc)
        if collection_listeners:
            docs = self.list(path[:-1])
            for listener in collection_listeners:
                listener(docs)
