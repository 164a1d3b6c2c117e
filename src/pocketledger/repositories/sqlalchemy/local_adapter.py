"""Local-only persistence adapter backed by SQLite."""

import logging
import threading

from sqlalchemy import Engine

from pocketledger.domain.models import LedgerState
from pocketledger.repositories.protocols import StateListener, Unsubscribe
from pocketledger.repositories.sqlalchemy.database import create_schema, session_factory
from pocketledger.repositories.sqlalchemy.ledger_store import SqlAlchemyLedgerStore

logger = logging.getLogger(__name__)


class LocalAdapter:
    """
    Persistence adapter for the local-only deployment.

    The process is the sole writer, so there is nothing to subscribe to.
    Every persist is a full transactional replace of the local database.
    The adapter owns ``engine`` and disposes it on close.
    """

    def __init__(self, engine: Engine):
        self._engine = engine
        self._session_factory = session_factory(engine)
        self._lock = threading.RLock()
        create_schema(engine)

    def load(self) -> LedgerState:
        with self._lock, self._session_factory() as session:
            return SqlAlchemyLedgerStore(session).load_state()

    def persist(self, state: LedgerState) -> None:
        with self._lock, self._session_factory() as session:
            SqlAlchemyLedgerStore(session).replace_state(state)

    def subscribe(self, on_change: StateListener) -> Unsubscribe:
        return lambda: None

    def close(self) -> None:
        self._engine.dispose()
        logger.debug("Local adapter closed")
