"""Relational backend endpoints used by the hybrid remote-API mode."""

import logging

from fastapi import APIRouter, Depends

from pocketledger.api.deps import get_ledger_store
from pocketledger.repositories.sqlalchemy import SqlAlchemyLedgerStore
from pocketledger.repositories.wire import LedgerStateWire

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["sync"])


@router.get("/data")
def get_data(store: SqlAlchemyLedgerStore = Depends(get_ledger_store)) -> dict:
    """Return the full stored ledger in wire format."""
    return LedgerStateWire.from_domain(store.load_state()).to_document()


@router.post("/sync")
def sync(payload: LedgerStateWire, store: SqlAlchemyLedgerStore = Depends(get_ledger_store)) -> dict:
    """
    Replace the stored ledger with the submitted one.

    All-or-nothing: on failure the previous contents are kept and 503 is
    returned.
    """
    state = payload.to_domain()
    store.replace_state(state)
    logger.info(
        "Synced %d accounts, %d categories, %d transactions",
        len(state.accounts),
        len(state.categories),
        len(state.transactions),
    )
    return {"success": True}
