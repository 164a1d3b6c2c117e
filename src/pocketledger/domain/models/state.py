"""Aggregate ledger state and undo snapshots."""

import copy
from dataclasses import dataclass, field

from pocketledger.domain.models.account import Account
from pocketledger.domain.models.category import Category
from pocketledger.domain.models.transaction import Transaction


@dataclass
class LedgerState:
    """Everything a persistence adapter loads and stores for one user."""

    accounts: list[Account] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Return True when no account or category exists yet."""
        return not self.accounts and not self.categories

    def copy(self) -> "LedgerState":
        """Return a deep copy safe to hand to other components."""
        return copy.deepcopy(self)


@dataclass
class Snapshot:
    """Transactions and accounts captured right before a mutation."""

    transactions: list[Transaction]
    accounts: list[Account]

    @classmethod
    def capture(cls, state: LedgerState) -> "Snapshot":
        return cls(
            transactions=copy.deepcopy(state.transactions),
            accounts=copy.deepcopy(state.accounts),
        )
