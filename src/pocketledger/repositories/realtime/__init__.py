"""Real-time document store backend."""

from pocketledger.repositories.realtime.document_store import InMemoryDocumentStore
from pocketledger.repositories.realtime.adapter import RealtimeDocumentAdapter

__all__ = ["InMemoryDocumentStore", "RealtimeDocumentAdapter"]
