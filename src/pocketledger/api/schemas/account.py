"""Pydantic schemas for account endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from pocketledger.domain.models.enums import AccountType


class AccountCreateRequest(BaseModel):
    """Request schema for creating an account."""

    name: str = Field(..., min_length=1, max_length=255, description="Account name")
    type: AccountType = Field(..., description="bank, credit or cash")
    opening_balance: Decimal = Field(default=Decimal("0"), description="Balance before any transaction")
    color: str = Field(default="#71717a", max_length=32)
    credit_limit: Optional[Decimal] = Field(default=None, ge=0, description="Credit accounts only")
    due_date: Optional[str] = Field(default=None, max_length=32, description="Credit accounts only")


class AccountUpdateRequest(BaseModel):
    """Request schema for updating an account (partial update)."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[AccountType] = None
    opening_balance: Optional[Decimal] = None
    color: Optional[str] = Field(default=None, max_length=32)
    credit_limit: Optional[Decimal] = Field(default=None, ge=0)
    due_date: Optional[str] = Field(default=None, max_length=32)


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    model_config = {"from_attributes": True}

    id: str
    name: str
    type: AccountType
    balance: Decimal
    opening_balance: Decimal
    color: str
    credit_limit: Optional[Decimal] = None
    due_date: Optional[str] = None


class AccountListResponse(BaseModel):
    """Response schema for listing accounts."""

    accounts: list[AccountResponse]
    count: int
