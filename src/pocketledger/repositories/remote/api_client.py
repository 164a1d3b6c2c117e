"""HTTP client for the relational sync API."""

import logging
from typing import Optional

import httpx

from pocketledger.core.exceptions import PersistenceError
from pocketledger.domain.models import LedgerState
from pocketledger.repositories.wire import LedgerStateWire

logger = logging.getLogger(__name__)


class SyncApiClient:
    """
    Talks to ``GET {base}/data`` and ``POST {base}/sync``.

    An existing ``httpx.Client`` may be injected (for example a FastAPI
    ``TestClient``); otherwise one is created for ``base_url``.
    """

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.Client] = None,
        timeout_seconds: float = 10.0,
    ):
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout_seconds)

    @property
    def base_url(self) -> str:
        return self._base_url

    def fetch(self) -> LedgerState:
        """Download the full remote ledger."""
        try:
            response = self._client.get(f"{self._base_url}/data")
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise PersistenceError(f"Failed to fetch from remote API: {exc}") from exc
        return LedgerStateWire.model_validate(response.json()).to_domain()

    def push(self, state: LedgerState) -> None:
        """Replace the remote ledger with ``state``."""
        payload = LedgerStateWire.from_domain(state).to_document()
        try:
            response = self._client.post(f"{self._base_url}/sync", json=payload)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise PersistenceError(f"Failed to sync to remote API: {exc}") from exc
        logger.debug("Pushed %d transactions to %s", len(state.transactions), self._base_url)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
