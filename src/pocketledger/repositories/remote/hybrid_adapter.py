"""Hybrid persistence: local cache first, best-effort push to the remote API."""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pocketledger.core.dates import now_local
from pocketledger.core.exceptions import PersistenceError
from pocketledger.domain.models import LedgerState
from pocketledger.repositories.protocols import PersistenceAdapter, StateListener, Unsubscribe
from pocketledger.repositories.remote.api_client import SyncApiClient

logger = logging.getLogger(__name__)


@dataclass
class SyncStatus:
    """Outcome of the most recent remote push."""

    enabled: bool
    api_url: str
    last_sync: Optional[datetime] = None
    last_error: Optional[str] = None


class RemoteApiAdapter:
    """
    Persistence adapter for the hybrid remote-API deployment.

    The local adapter is authoritative: a persist succeeds once the local
    write succeeds. When remote sync is enabled the same state is then pushed
    in the background; a failed push only flags ``status.last_error``.
    """

    def __init__(
        self,
        local: PersistenceAdapter,
        api: SyncApiClient,
        sync_enabled: bool = True,
    ):
        self._local = local
        self._api = api
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ledger-sync")
        self._pending: set[Future] = set()
        self._pending_lock = threading.Lock()
        self.status = SyncStatus(enabled=sync_enabled, api_url=api.base_url)

    def load(self) -> LedgerState:
        return self._local.load()

    def persist(self, state: LedgerState) -> None:
        self._local.persist(state)
        if self.status.enabled:
            self._schedule_push(state.copy())

    def subscribe(self, on_change: StateListener) -> Unsubscribe:
        return self._local.subscribe(on_change)

    def pull(self) -> LedgerState:
        """Fetch the remote ledger and make it the local one."""
        state = self._api.fetch()
        self._local.persist(state)
        return state

    def set_sync_enabled(self, enabled: bool) -> None:
        self.status.enabled = enabled

    def wait_for_sync(self, timeout: Optional[float] = None) -> None:
        """Block until every queued push has finished."""
        with self._pending_lock:
            pending = list(self._pending)
        wait(pending, timeout=timeout)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        self._api.close()
        self._local.close()

    def _schedule_push(self, state: LedgerState) -> None:
        future = self._executor.submit(self._push, state)
        with self._pending_lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)

    def _forget(self, future: Future) -> None:
        with self._pending_lock:
            self._pending.discard(future)

    def _push(self, state: LedgerState) -> None:
        try:
            self._api.push(state)
        except PersistenceError as exc:
            self.status.last_error = exc.message
            logger.warning("Remote sync failed: %s", exc.message)
            return
        self.status.last_sync = now_local()
        self.status.last_error = None
