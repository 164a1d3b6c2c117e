"""Service layer - business logic orchestration."""

from pocketledger.services.ledger_service import (
    LedgerService,
    TransactionData,
    AccountCreate,
    AccountUpdate,
)
from pocketledger.services.notifications import Notification, NotificationCenter
from pocketledger.services.summary_service import SummaryService
from pocketledger.services.export_service import build_export_snapshot, resolve_period

__all__ = [
    "LedgerService",
    "TransactionData",
    "AccountCreate",
    "AccountUpdate",
    "Notification",
    "NotificationCenter",
    "SummaryService",
    "build_export_snapshot",
    "resolve_period",
]
