"""API request/response schemas."""

from pocketledger.api.schemas.account import (
    AccountCreateRequest,
    AccountUpdateRequest,
    AccountResponse,
    AccountListResponse,
)
from pocketledger.api.schemas.category import (
    CategoryCreateRequest,
    CategoryUpdateRequest,
    CategoryResponse,
    CategoryListResponse,
)
from pocketledger.api.schemas.transaction import (
    SplitSchema,
    TransactionRequest,
    TransactionResponse,
    TransactionListResponse,
)
from pocketledger.api.schemas.ledger import (
    NotificationResponse,
    UndoResponse,
    LedgerStateResponse,
    ExportRequestSchema,
    ExportResponse,
    SummaryResponse,
    ReconcileResponse,
    DriftItem,
    SyncStatusResponse,
    SyncToggleRequest,
)

__all__ = [
    "AccountCreateRequest",
    "AccountUpdateRequest",
    "AccountResponse",
    "AccountListResponse",
    "CategoryCreateRequest",
    "CategoryUpdateRequest",
    "CategoryResponse",
    "CategoryListResponse",
    "SplitSchema",
    "TransactionRequest",
    "TransactionResponse",
    "TransactionListResponse",
    "NotificationResponse",
    "UndoResponse",
    "LedgerStateResponse",
    "ExportRequestSchema",
    "ExportResponse",
    "SummaryResponse",
    "ReconcileResponse",
    "DriftItem",
    "SyncStatusResponse",
    "SyncToggleRequest",
]
