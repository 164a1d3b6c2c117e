"""Domain models package."""

from pocketledger.domain.models.enums import AccountType, CategoryType, TransactionType
from pocketledger.domain.models.account import Account
from pocketledger.domain.models.category import Category, TRANSFER_CATEGORY_ID
from pocketledger.domain.models.transaction import Transaction, TransactionSplit
from pocketledger.domain.models.state import LedgerState, Snapshot
from pocketledger.domain.models.defaults import default_accounts, default_categories

__all__ = [
    "AccountType",
    "CategoryType",
    "TransactionType",
    "Account",
    "Category",
    "TRANSFER_CATEGORY_ID",
    "Transaction",
    "TransactionSplit",
    "LedgerState",
    "Snapshot",
    "default_accounts",
    "default_categories",
]
