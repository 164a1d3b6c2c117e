"""Repository protocol definitions (interfaces)."""

from pocketledger.repositories.protocols.persistence import (
    PersistenceAdapter,
    StateListener,
    Unsubscribe,
)
from pocketledger.repositories.protocols.document_store import (
    DocumentStore,
    Document,
    DocumentListener,
    CollectionListener,
)

__all__ = [
    "PersistenceAdapter",
    "StateListener",
    "Unsubscribe",
    "DocumentStore",
    "Document",
    "DocumentListener",
    "CollectionListener",
]
