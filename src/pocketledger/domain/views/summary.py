"""View models for dashboard summaries."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass
class CreditUtilizationView:
    """Outstanding balance of a credit account against its limit."""

    account_id: str
    name: str
    outstanding: Decimal
    credit_limit: Optional[Decimal]
    utilization_percent: Optional[Decimal] = None
    due_date: Optional[str] = None


@dataclass
class CategoryTotalView:
    """Total amount booked against one category."""

    category_id: str
    name: str
    type: str
    amount: Decimal


@dataclass
class DailyFlowView:
    """Income and expense booked on one calendar day."""

    day: date
    income: Decimal = field(default_factory=lambda: Decimal("0"))
    expense: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class LedgerSummaryView:
    """Aggregated view over the whole ledger."""

    total_income: Decimal
    total_expense: Decimal
    net_flow: Decimal
    liquid_total: Decimal
    credit: list[CreditUtilizationView] = field(default_factory=list)
    categories: list[CategoryTotalView] = field(default_factory=list)
    daily_flow: list[DailyFlowView] = field(default_factory=list)
