"""Enumerations for domain models."""

from enum import Enum


class AccountType(str, Enum):
    """Kinds of money containers."""

    BANK = "bank"
    CREDIT = "credit"
    CASH = "cash"


class CategoryType(str, Enum):
    """Which side of the ledger a category classifies."""

    INCOME = "income"
    EXPENSE = "expense"


class TransactionType(str, Enum):
    """Types of ledger transactions."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"
