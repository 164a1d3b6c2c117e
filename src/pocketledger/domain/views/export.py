"""Read-only snapshots handed to external export formatters."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from pocketledger.domain.models import Account, Category, Transaction, TransactionType


class ExportFormat(str, Enum):
    """Output formats an external formatter may produce."""

    PDF = "pdf"
    CSV = "csv"
    XLSX = "xlsx"
    JSON = "json"


class ExportPeriod(str, Enum):
    """Date windows selectable for an export."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    ALL = "all"


@dataclass
class ExportRequest:
    """
    Filter contract for an export.

    ``date_value`` is ``YYYY-MM-DD`` for daily/weekly, ``YYYY-MM`` for monthly,
    ``YYYY`` for yearly and ``all`` (or empty) for the whole ledger.
    """

    format: ExportFormat
    period: ExportPeriod
    date_value: Optional[str] = "all"
    types: Optional[list[TransactionType]] = None

    def __post_init__(self) -> None:
        if isinstance(self.format, str):
            self.format = ExportFormat(self.format)
        if isinstance(self.period, str):
            self.period = ExportPeriod(self.period)
        if self.types is not None:
            self.types = [TransactionType(t) for t in self.types]


@dataclass
class ExportSnapshot:
    """Filtered ledger contents plus the resolved date range."""

    request: ExportRequest
    start: Optional[date]
    end: Optional[date]
    transactions: list[Transaction] = field(default_factory=list)
    accounts: list[Account] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
