"""Pydantic models for the stored and transmitted ledger format.

Field names follow the camelCase document layout shared by the document
store and the relational sync API.
"""

from datetime import date as CalendarDate
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pocketledger.domain.models import (
    Account,
    AccountType,
    Category,
    CategoryType,
    LedgerState,
    Transaction,
    TransactionSplit,
    TransactionType,
)


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class AccountWire(WireModel):
    id: str
    name: str
    type: AccountType
    balance: Decimal
    color: str = "#71717a"
    credit_limit: Optional[Decimal] = None
    due_date: Optional[str] = None
    opening_balance: Decimal = Decimal("0")

    @classmethod
    def from_domain(cls, account: Account) -> "AccountWire":
        return cls(
            id=account.id,
            name=account.name,
            type=account.type,
            balance=account.balance,
            color=account.color,
            credit_limit=account.credit_limit,
            due_date=account.due_date,
            opening_balance=account.opening_balance,
        )

    def to_domain(self) -> Account:
        return Account(
            id=self.id,
            name=self.name,
            type=self.type,
            balance=self.balance,
            color=self.color,
            credit_limit=self.credit_limit,
            due_date=self.due_date,
            opening_balance=self.opening_balance,
        )


class CategoryWire(WireModel):
    id: str
    name: str
    type: CategoryType
    icon: Optional[str] = None

    @classmethod
    def from_domain(cls, category: Category) -> "CategoryWire":
        return cls(id=category.id, name=category.name, type=category.type, icon=category.icon)

    def to_domain(self) -> Category:
        return Category(id=self.id, name=self.name, type=self.type, icon=self.icon)


class SplitWire(WireModel):
    category_id: str
    amount: Decimal
    description: Optional[str] = None


class TransactionWire(WireModel):
    id: str
    amount: Decimal
    type: TransactionType
    from_account_id: str
    date: CalendarDate
    category_id: str
    description: str = ""
    to_account_id: Optional[str] = None
    splits: list[SplitWire] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, tx: Transaction) -> "TransactionWire":
        return cls(
            id=tx.id,
            amount=tx.amount,
            type=tx.type,
            from_account_id=tx.from_account_id,
            date=tx.date,
            category_id=tx.category_id,
            description=tx.description,
            to_account_id=tx.to_account_id,
            splits=[
                SplitWire(category_id=s.category_id, amount=s.amount, description=s.description)
                for s in tx.splits
            ],
        )

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            amount=self.amount,
            type=self.type,
            from_account_id=self.from_account_id,
            date=self.date,
            category_id=self.category_id,
            description=self.description,
            to_account_id=self.to_account_id,
            splits=[
                TransactionSplit(category_id=s.category_id, amount=s.amount, description=s.description)
                for s in self.splits
            ],
        )


class LedgerStateWire(WireModel):
    accounts: list[AccountWire] = Field(default_factory=list)
    categories: list[CategoryWire] = Field(default_factory=list)
    transactions: list[TransactionWire] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, state: LedgerState) -> "LedgerStateWire":
        return cls(
            accounts=[AccountWire.from_domain(a) for a in state.accounts],
            categories=[CategoryWire.from_domain(c) for c in state.categories],
            transactions=[TransactionWire.from_domain(t) for t in state.transactions],
        )

    def to_domain(self) -> LedgerState:
        return LedgerState(
            accounts=[a.to_domain() for a in self.accounts],
            categories=[c.to_domain() for c in self.categories],
            transactions=[t.to_domain() for t in self.transactions],
        )
