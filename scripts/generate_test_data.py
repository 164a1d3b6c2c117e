#!/usr/bin/env python3
"""
Generate realistic ledger data for the last 3 months.
Simulates a household with salary income, daily spending, card payments
and the occasional split receipt.
"""

import random
from datetime import date, timedelta
from decimal import Decimal

from pocketledger.app_context import get_app_context
from pocketledger.domain.models import TransactionSplit, TransactionType
from pocketledger.services import TransactionData

MAX_TRANSACTIONS = 100

# (category id, low, high) for everyday expenses
EXPENSES = [
    ("cat-4", 8, 60),     # Dining
    ("cat-5", 60, 180),   # Utilities
    ("cat-6", 5, 40),     # Transport
    ("cat-7", 40, 250),   # Shopping
    ("cat-8", 10, 90),    # Entertainment
]


def _money(low: float, high: float) -> Decimal:
    return Decimal(str(round(random.uniform(low, high), 2)))


def generate_realistic_data():
    """Generate realistic ledger activity for the last 3 months."""
    ledger = get_app_context().ledger

    today = date.today()
    start_date = today - timedelta(days=90)
    print(f"Generating transactions from {start_date} to {today}")
    print("=" * 60)

    entries: list[TransactionData] = []

    # Salary on the 1st of each month into the main bank account
    month = date(start_date.year, start_date.month, 1)
    while month <= today:
        if month >= start_date:
            entries.append(TransactionData(
                amount=Decimal("4200.00"),
                type=TransactionType.INCOME,
                from_account_id="acc-1",
                date=month,
                category_id="cat-2",
                description="Monthly salary",
            ))
            # Move savings right after payday
            entries.append(TransactionData(
                amount=Decimal("800.00"),
                type=TransactionType.TRANSFER,
                from_account_id="acc-1",
                to_account_id="acc-2",
                date=month,
                description="Savings",
            ))
        month = date(month.year + (month.month // 12), month.month % 12 + 1, 1)

    # Everyday spending, mostly on the credit card
    while len(entries) < MAX_TRANSACTIONS - 5:
        category_id, low, high = random.choice(EXPENSES)
        account_id = random.choice(["acc-3", "acc-3", "acc-cash", "acc-1"])
        entries.append(TransactionData(
            amount=_money(low, high),
            type=TransactionType.EXPENSE,
            from_account_id=account_id,
            date=start_date + timedelta(days=random.randint(0, 90)),
            category_id=category_id,
        ))

    # A grocery run split between dining and shopping
    entries.append(TransactionData(
        amount=Decimal("120.00"),
        type=TransactionType.EXPENSE,
        from_account_id="acc-3",
        date=today,
        category_id="cat-4",
        description="Supermarket",
        splits=[
            TransactionSplit(category_id="cat-4", amount=Decimal("85.00")),
            TransactionSplit(category_id="cat-7", amount=Decimal("35.00"), description="Cleaning"),
        ],
    ))

    created = 0
    for entry in entries:
        if ledger.create_transaction(entry) is not None:
            created += 1
            if created % 10 == 0:
                print(f"  Generated {created} transactions...")

    print(f"\n✓ Created {created} transactions")
    print("\nBalances:")
    for account in ledger.accounts:
        print(f"  {account.name:<20} {account.balance:>12,.2f}")


if __name__ == "__main__":
    generate_realistic_data()
