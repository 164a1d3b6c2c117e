"""Pydantic schemas for undo, notification, summary, export and reconcile endpoints."""

from datetime import date as CalendarDate
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from pocketledger.domain.models.enums import TransactionType
from pocketledger.domain.views.export import ExportFormat, ExportPeriod
from pocketledger.api.schemas.account import AccountResponse
from pocketledger.api.schemas.category import CategoryResponse
from pocketledger.api.schemas.transaction import TransactionResponse


class NotificationResponse(BaseModel):
    """Visible status message; ``undoable`` while an undo snapshot is held."""

    model_config = {"from_attributes": True}

    message: str
    undoable: bool


class UndoResponse(BaseModel):
    accounts: list[AccountResponse]
    transactions: list[TransactionResponse]


class LedgerStateResponse(BaseModel):
    accounts: list[AccountResponse]
    categories: list[CategoryResponse]
    transactions: list[TransactionResponse]


class ExportRequestSchema(BaseModel):
    """Request schema for an export snapshot."""

    format: ExportFormat
    period: ExportPeriod
    date_value: Optional[str] = Field(
        default="all",
        description="YYYY-MM-DD (daily/weekly), YYYY-MM (monthly), YYYY (yearly) or 'all'",
    )
    types: Optional[list[TransactionType]] = None


class ExportResponse(BaseModel):
    """Filtered ledger handed to an external formatter."""

    format: ExportFormat
    period: ExportPeriod
    start: Optional[CalendarDate] = None
    end: Optional[CalendarDate] = None
    transactions: list[TransactionResponse]
    accounts: list[AccountResponse]
    categories: list[CategoryResponse]


class CreditUtilizationResponse(BaseModel):
    model_config = {"from_attributes": True}

    account_id: str
    name: str
    outstanding: Decimal
    credit_limit: Optional[Decimal] = None
    utilization_percent: Optional[Decimal] = None
    due_date: Optional[str] = None


class CategoryTotalResponse(BaseModel):
    model_config = {"from_attributes": True}

    category_id: str
    name: str
    type: str
    amount: Decimal


class DailyFlowResponse(BaseModel):
    model_config = {"from_attributes": True}

    day: CalendarDate
    income: Decimal
    expense: Decimal


class SummaryResponse(BaseModel):
    """Response schema for the ledger summary."""

    model_config = {"from_attributes": True}

    total_income: Decimal
    total_expense: Decimal
    net_flow: Decimal
    liquid_total: Decimal
    credit: list[CreditUtilizationResponse]
    categories: list[CategoryTotalResponse]
    daily_flow: list[DailyFlowResponse]


class DriftItem(BaseModel):
    account_id: str
    stored: Decimal
    expected: Decimal


class ReconcileResponse(BaseModel):
    """Balances corrected by the reconciliation pass (empty when consistent)."""

    corrected: list[DriftItem]
    count: int


class SyncStatusResponse(BaseModel):
    model_config = {"from_attributes": True}

    enabled: bool
    api_url: str
    last_sync: Optional[datetime] = None
    last_error: Optional[str] = None


class SyncToggleRequest(BaseModel):
    enabled: bool
