"""Domain layer - pure business models with no external dependencies."""

from pocketledger.domain.models import (
    Account,
    AccountType,
    Category,
    CategoryType,
    LedgerState,
    Snapshot,
    Transaction,
    TransactionSplit,
    TransactionType,
    TRANSFER_CATEGORY_ID,
)

__all__ = [
    "Account",
    "AccountType",
    "Category",
    "CategoryType",
    "LedgerState",
    "Snapshot",
    "Transaction",
    "TransactionSplit",
    "TransactionType",
    "TRANSFER_CATEGORY_ID",
]
