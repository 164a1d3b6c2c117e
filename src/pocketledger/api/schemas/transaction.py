"""Pydantic schemas for transaction endpoints."""

from datetime import date as CalendarDate
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from pocketledger.domain.models import TransactionSplit
from pocketledger.domain.models.enums import TransactionType
from pocketledger.services.ledger_service import TransactionData


class SplitSchema(BaseModel):
    """One part of a split transaction."""

    model_config = {"from_attributes": True}

    category_id: str
    amount: Decimal
    description: Optional[str] = None


class TransactionRequest(BaseModel):
    """
    Request schema for creating a transaction or replacing one on edit.

    Business rules (accounts exist, category matches type, splits add up)
    are checked by the ledger service.
    """

    amount: Decimal = Field(..., description="Positive amount")
    type: TransactionType
    from_account_id: str = Field(..., min_length=1)
    date: Optional[CalendarDate] = Field(default=None, description="Defaults to today")
    category_id: Optional[str] = Field(default=None, description="Ignored for transfers")
    description: str = Field(default="", max_length=500)
    to_account_id: Optional[str] = Field(default=None, description="Required for transfers")
    splits: list[SplitSchema] = Field(default_factory=list)

    def to_data(self) -> TransactionData:
        return TransactionData(
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


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    model_config = {"from_attributes": True}

    id: str
    amount: Decimal
    type: TransactionType
    from_account_id: str
    date: CalendarDate
    category_id: str
    description: str
    to_account_id: Optional[str] = None
    splits: list[SplitSchema] = Field(default_factory=list)


class TransactionListResponse(BaseModel):
    """Response schema for listing transactions, newest first."""

    transactions: list[TransactionResponse]
    count: int
