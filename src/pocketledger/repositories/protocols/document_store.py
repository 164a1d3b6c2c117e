"""Document store protocol used by the real-time backend."""

from typing import Any, Callable, Optional, Protocol

Document = dict[str, Any]
DocumentListener = Callable[[Optional[Document]], None]
CollectionListener = Callable[[dict[str, Document]], None]


class DocumentStore(Protocol):
    """
    Minimal real-time document database.

    Paths are tuples alternating collection and document names, e.g.
    ``("users", "u1")`` or ``("users", "u1", "transactions", "tx-1")``.
    Watchers fire once with the current contents on registration and again
    after every write that affects them.
    """

    def get(self, path: tuple[str, ...]) -> Optional[Document]:
        ...

    def list(self, collection: tuple[str, ...]) -> dict[str, Document]:
        ...

    def set(self, path: tuple[str, ...], data: Document, merge: bool = False) -> None:
        ...

    def delete(self, path: tuple[str, ...]) -> None:
        ...

    def watch_document(self, path: tuple[str, ...], listener: DocumentListener) -> Callable[[], None]:
        ...

    def watch_collection(
        self,
        collection: tuple[str, ...],
        listener: CollectionListener,
    ) -> Callable[[], None]:
        ...
