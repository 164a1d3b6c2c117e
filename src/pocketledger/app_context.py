"""Application context for in-process service management.

Builds the persistence adapter selected by the settings once, and hands out
the long-lived ledger services built on top of it.
"""

from typing import Optional

from pocketledger.config.settings import Settings, get_settings
from pocketledger.core.exceptions import ValidationError
from pocketledger.domain.models import LedgerState
from pocketledger.repositories.protocols import PersistenceAdapter
from pocketledger.repositories.realtime import InMemoryDocumentStore, RealtimeDocumentAdapter
from pocketledger.repositories.remote import RemoteApiAdapter, SyncApiClient, SyncStatus
from pocketledger.repositories.sqlalchemy import LocalAdapter, build_engine
from pocketledger.services import LedgerService, NotificationCenter, SummaryService


class AppContext:
    """
    Application context providing access to the ledger services.

    The adapter is chosen from ``settings.effective_backend()`` and never
    switched afterwards; the ledger service is started on first access.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        adapter: Optional[PersistenceAdapter] = None,
    ):
        self._settings = settings
        self._adapter = adapter

        # Service instances (lazy initialized)
        self._notifications: Optional[NotificationCenter] = None
        self._ledger_service: Optional[LedgerService] = None
        self._summary_service: Optional[SummaryService] = None

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    @property
    def adapter(self) -> PersistenceAdapter:
        """Get the persistence adapter, building it on first use."""
        if self._adapter is None:
            self._adapter = build_adapter(self.settings)
        return self._adapter

    @property
    def sync_status(self) -> Optional[SyncStatus]:
        """Remote push status, when running the hybrid remote-API backend."""
        if isinstance(self._adapter, RemoteApiAdapter):
            return self._adapter.status
        return None

    def pull_remote(self) -> LedgerState:
        """Replace the local ledger with the remote API's copy and reload it."""
        adapter = self._remote_adapter()
        return self.ledger.reload(adapter.pull)

    def set_remote_sync(self, enabled: bool) -> SyncStatus:
        """Turn the background push to the remote API on or off."""
        adapter = self._remote_adapter()
        adapter.set_sync_enabled(enabled)
        return adapter.status

    def _remote_adapter(self) -> RemoteApiAdapter:
        adapter = self.adapter
        if not isinstance(adapter, RemoteApiAdapter):
            raise ValidationError("Remote sync is only available with the remote_api backend")
        return adapter

    @property
    def notifications(self) -> NotificationCenter:
        if self._notifications is None:
            settings = self.settings
            self._notifications = NotificationCenter(
                auto_dismiss_ms=settings.undo_auto_dismiss_ms,
                keep_undo_after_dismiss=settings.keep_undo_after_dismiss,
            )
        return self._notifications

    @property
    def ledger(self) -> LedgerService:
        """Get the started LedgerService instance."""
        if self._ledger_service is None:
            settings = self.settings
            service = LedgerService(
                adapter=self.adapter,
                notifications=self.notifications,
                seed_defaults=settings.seed_defaults,
                reconcile_on_load=settings.reconcile_on_load,
                persist_undo=settings.persist_undo,
            )
            service.start()
            self._ledger_service = service
        return self._ledger_service

    @property
    def summary(self) -> SummaryService:
        """Get the SummaryService instance."""
        if self._summary_service is None:
            self._summary_service = SummaryService(ledger_service=self.ledger)
        return self._summary_service

    def close(self) -> None:
        """Clean up resources."""
        if self._ledger_service is not None:
            self._ledger_service.close()
        elif self._adapter is not None:
            self._adapter.close()
        self._ledger_service = None
        self._summary_service = None
        self._adapter = None


# Shared document store so every client in this process sees the same documents
_document_store: Optional[InMemoryDocumentStore] = None


def get_document_store() -> InMemoryDocumentStore:
    """Get or create the process-wide document store."""
    global _document_store
    if _document_store is None:
        _document_store = InMemoryDocumentStore()
    return _document_store


def build_adapter(settings: Settings) -> PersistenceAdapter:
    """Construct the persistence adapter for the configured backend."""
    backend = settings.effective_backend()

    if backend == "realtime":
        return RealtimeDocumentAdapter(get_document_store(), settings.user_id)

    local = LocalAdapter(build_engine(settings.get_local_database_url()))
    if backend == "remote_api":
        api = SyncApiClient(settings.remote_api_url, timeout_seconds=settings.remote_timeout_seconds)
        return RemoteApiAdapter(local, api, sync_enabled=settings.remote_sync_enabled)
    return local


# Global application context
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear) the global application context."""
    global _app_context
    _app_context = context
