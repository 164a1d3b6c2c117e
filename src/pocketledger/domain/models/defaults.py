"""Default account and category set for a fresh ledger."""

from decimal import Decimal

from pocketledger.domain.models.account import Account
from pocketledger.domain.models.category import Category
from pocketledger.domain.models.enums import AccountType, CategoryType


def default_accounts() -> list[Account]:
    """Return the seeded accounts (opening balance equals balance)."""
    seeds = [
        ("acc-cash", "Cash Wallet", AccountType.CASH, Decimal("5000"), "#d4af37", None, None),
        ("acc-1", "Main Checking", AccountType.BANK, Decimal("150000"), "#ffffff", None, None),
        ("acc-2", "Savings", AccountType.BANK, Decimal("45000"), "#3B82F6", None, None),
        ("acc-3", "Credit Card", AccountType.CREDIT, Decimal("0"), "#71717a", Decimal("500000"), "15th"),
    ]
    return [
        Account(
            id=account_id,
            name=name,
            type=account_type,
            balance=balance,
            color=color,
            credit_limit=credit_limit,
            due_date=due_date,
            opening_balance=balance,
        )
        for account_id, name, account_type, balance, color, credit_limit, due_date in seeds
    ]


def default_categories() -> list[Category]:
    """Return the seeded income and expense categories."""
    return [
        Category(id="cat-1", name="Dividends", type=CategoryType.INCOME),
        Category(id="cat-2", name="Salary", type=CategoryType.INCOME),
        Category(id="cat-3", name="Capital Gains", type=CategoryType.INCOME),
        Category(id="cat-4", name="Dining", type=CategoryType.EXPENSE),
        Category(id="cat-5", name="Utilities", type=CategoryType.EXPENSE),
        Category(id="cat-6", name="Transport", type=CategoryType.EXPENSE),
        Category(id="cat-7", name="Shopping", type=CategoryType.EXPENSE),
        Category(id="cat-8", name="Entertainment", type=CategoryType.EXPENSE),
    ]
