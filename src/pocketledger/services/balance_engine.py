"""Balance reconciliation engine.

Pure functions mapping transactions to account balance changes. Nothing here
performs I/O or mutates its inputs.
"""

import dataclasses
from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from pocketledger.domain.models import Account, Transaction, TransactionType

APPLY = 1
REVERSE = -1


def transaction_effects(tx: Transaction) -> dict[str, Decimal]:
    """
    Return the signed balance delta the transaction causes per account id.

    Income credits the source account, expense debits it, a transfer debits
    the source and credits the destination.
    """
    effects: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    if tx.type == TransactionType.INCOME:
        effects[tx.from_account_id] += tx.amount
    elif tx.type == TransactionType.EXPENSE:
        effects[tx.from_account_id] -= tx.amount
    elif tx.type == TransactionType.TRANSFER:
        effects[tx.from_account_id] -= tx.amount
        if tx.to_account_id:
            effects[tx.to_account_id] += tx.amount
    return dict(effects)


def apply_effect(accounts: list[Account], tx: Transaction, factor: int) -> list[Account]:
    """
    Apply (``factor=+1``) or reverse (``factor=-1``) a transaction.

    Returns a new list; touched accounts are replaced by updated copies and
    untouched ones are passed through. Account ids the transaction references
    but which are not in ``accounts`` are ignored.
    """
    if factor not in (APPLY, REVERSE):
        raise ValueError(f"factor must be +1 or -1, got {factor}")

    effects = transaction_effects(tx)
    result = []
    for account in accounts:
        delta = effects.get(account.id)
        if delta is None:
            result.append(account)
        else:
            result.append(dataclasses.replace(account, balance=account.balance + delta * factor))
    return result


def expected_balances(
    accounts: list[Account],
    transactions: Iterable[Transaction],
) -> dict[str, Decimal]:
    """Compute ``opening_balance + sum(effects)`` for every account."""
    balances = {account.id: account.opening_balance for account in accounts}
    for tx in transactions:
        for account_id, delta in transaction_effects(tx).items():
            if account_id in balances:
                balances[account_id] += delta
    return balances


def find_drift(
    accounts: list[Account],
    transactions: Iterable[Transaction],
) -> dict[str, tuple[Decimal, Decimal]]:
    """Return ``{account_id: (stored, expected)}`` for every inconsistent balance."""
    expected = expected_balances(accounts, transactions)
    return {
        account.id: (account.balance, expected[account.id])
        for account in accounts
        if account.balance != expected[account.id]
    }


def recompute_balances(
    accounts: list[Account],
    transactions: Iterable[Transaction],
) -> list[Account]:
    """
    Rebuild every balance from the transaction log.

    Stored balances are treated as a cache; the log plus each account's
    opening balance is authoritative.
    """
    expected = expected_balances(accounts, transactions)
    return [
        account
        if account.balance == expected[account.id]
        else dataclasses.replace(account, balance=expected[account.id])
        for account in accounts
    ]
