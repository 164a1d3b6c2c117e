"""API routers package."""

from pocketledger.api.routers.accounts import router as accounts_router
from pocketledger.api.routers.categories import router as categories_router
from pocketledger.api.routers.transactions import router as transactions_router
from pocketledger.api.routers.ledger import router as ledger_router
from pocketledger.api.routers.sync import router as sync_router

__all__ = [
    "accounts_router",
    "categories_router",
    "transactions_router",
    "ledger_router",
    "sync_router",
]
