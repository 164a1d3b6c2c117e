"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from pocketledger.domain.models.enums import TransactionType


@dataclass
class TransactionSplit:
    """Portion of a transaction allocated to one category."""

    category_id: str
    amount: Decimal
    description: Optional[str] = None


@dataclass
class Transaction:
    """
    Ledger entry (source of truth for balances).

    - ``amount`` is always positive; the direction of the effect comes from
      ``type`` alone
    - income/expense touch ``from_account_id`` only
    - transfers move ``amount`` from ``from_account_id`` to ``to_account_id``
    """

    id: str
    amount: Decimal
    type: TransactionType
    from_account_id: str
    date: date
    category_id: str
    description: str = ""
    to_account_id: Optional[str] = None
    splits: list[TransactionSplit] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.type, str):
            self.type = TransactionType(self.type)

    @property
    def is_transfer(self) -> bool:
        """Return True if this transaction moves money between accounts."""
        return self.type == TransactionType.TRANSFER

    def touches(self, account_id: str) -> bool:
        """Return True if the transaction affects the given account."""
        if self.from_account_id == account_id:
            return True
        return self.is_transfer and self.to_account_id == account_id
