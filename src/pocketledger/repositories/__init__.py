"""Repository layer - persistence adapters and storage implementations."""

from pocketledger.repositories.protocols import PersistenceAdapter, DocumentStore

__all__ = [
    "PersistenceAdapter",
    "DocumentStore",
]
