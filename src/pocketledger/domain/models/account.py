"""Account domain model."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from pocketledger.domain.models.enums import AccountType


@dataclass
class Account:
    """
    Money container (bank, credit card or cash).

    ``balance`` is derived state: it always equals ``opening_balance`` plus the
    net effect of every transaction touching the account. Only the ledger
    service changes it.
    """

    id: str
    name: str
    type: AccountType
    balance: Decimal = field(default_factory=lambda: Decimal("0"))
    color: str = "#71717a"
    credit_limit: Optional[Decimal] = None
    due_date: Optional[str] = None
    opening_balance: Decimal = field(default_factory=lambda: Decimal("0"))

    def __post_init__(self) -> None:
        if isinstance(self.type, str):
            self.type = AccountType(self.type)
        if self.type != AccountType.CREDIT:
            self.credit_limit = None
            self.due_date = None

    @property
    def is_credit(self) -> bool:
        """Return True for credit accounts."""
        return self.type == AccountType.CREDIT
