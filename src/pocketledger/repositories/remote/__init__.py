"""Relational remote API backend."""

from pocketledger.repositories.remote.api_client import SyncApiClient
from pocketledger.repositories.remote.hybrid_adapter import RemoteApiAdapter, SyncStatus

__all__ = ["SyncApiClient", "RemoteApiAdapter", "SyncStatus"]
