"""Ledger-wide endpoints: undo, notifications, summary, export, reconcile and remote sync."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from pocketledger.api.deps import (
    get_context,
    get_ledger_service,
    get_notification_center,
    get_summary_service,
)
from pocketledger.api.schemas.account import AccountResponse
from pocketledger.api.schemas.category import CategoryResponse
from pocketledger.api.schemas.transaction import TransactionResponse
from pocketledger.api.schemas.ledger import (
    DriftItem,
    ExportRequestSchema,
    ExportResponse,
    LedgerStateResponse,
    NotificationResponse,
    ReconcileResponse,
    SummaryResponse,
    SyncStatusResponse,
    SyncToggleRequest,
    UndoResponse,
)
from pocketledger.app_context import AppContext
from pocketledger.domain.views import ExportRequest
from pocketledger.services import LedgerService, NotificationCenter, SummaryService
from pocketledger.services.summary_service import DEFAULT_FLOW_DAYS

router = APIRouter(tags=["ledger"])


@router.post("/undo", response_model=UndoResponse)
def undo(ledger: LedgerService = Depends(get_ledger_service)):
    """Revert the most recent mutation while its notification is pending."""
    state = ledger.undo()
    return UndoResponse(
        accounts=[AccountResponse.model_validate(a) for a in state.accounts],
        transactions=[TransactionResponse.model_validate(t) for t in state.transactions],
    )


@router.get("/notifications/current", response_model=Optional[NotificationResponse])
def current_notification(notifications: NotificationCenter = Depends(get_notification_center)):
    """Return the visible status message, or null once it was dismissed."""
    notification = notifications.current()
    if notification is None:
        return None
    return NotificationResponse.model_validate(notification)


@router.get("/summary", response_model=SummaryResponse)
def summary(
    days: int = Query(DEFAULT_FLOW_DAYS, ge=1, le=366, description="Length of the daily flow"),
    end: Optional[date] = Query(None, description="Last day of the daily flow; defaults to today"),
    summary_service: SummaryService = Depends(get_summary_service),
):
    return SummaryResponse.model_validate(summary_service.summarize(days=days, end=end))


@router.post("/export", response_model=ExportResponse)
def export(data: ExportRequestSchema, ledger: LedgerService = Depends(get_ledger_service)):
    """
    Resolve an export filter into a read-only ledger snapshot.

    Rendering the requested format is left to the caller.
    """
    snapshot = ledger.export_snapshot(
        ExportRequest(
            format=data.format,
            period=data.period,
            date_value=data.date_value,
            types=data.types,
        )
    )
    return ExportResponse(
        format=snapshot.request.format,
        period=snapshot.request.period,
        start=snapshot.start,
        end=snapshot.end,
        transactions=[TransactionResponse.model_validate(t) for t in snapshot.transactions],
        accounts=[AccountResponse.model_validate(a) for a in snapshot.accounts],
        categories=[CategoryResponse.model_validate(c) for c in snapshot.categories],
    )


@router.post("/reconcile", response_model=ReconcileResponse)
def reconcile(ledger: LedgerService = Depends(get_ledger_service)):
    """Rebuild balances from the transaction log."""
    drift = ledger.reconcile()
    corrected = [
        DriftItem(account_id=account_id, stored=stored, expected=expected)
        for account_id, (stored, expected) in drift.items()
    ]
    return ReconcileResponse(corrected=corrected, count=len(corrected))


@router.get("/sync/status", response_model=Optional[SyncStatusResponse])
def sync_status(context: AppContext = Depends(get_context)):
    """Outcome of the last remote push; null unless the remote-API backend is active."""
    status = context.sync_status
    if status is None:
        return None
    return SyncStatusResponse.model_validate(status)


@router.put("/sync/enabled", response_model=SyncStatusResponse)
def set_sync_enabled(data: SyncToggleRequest, context: AppContext = Depends(get_context)):
    """Turn the background push to the remote API on or off."""
    return SyncStatusResponse.model_validate(context.set_remote_sync(data.enabled))


@router.post("/sync/pull", response_model=LedgerStateResponse)
def pull(context: AppContext = Depends(get_context)):
    """
    Replace the local ledger with the remote API's copy.

    Returns 400 unless the remote-API backend is active and 503 when the
    remote API cannot be read; the local ledger is unchanged in both cases.
    """
    state = context.pull_remote()
    return LedgerStateResponse(
        accounts=[AccountResponse.model_validate(a) for a in state.accounts],
        categories=[CategoryResponse.model_validate(c) for c in state.categories],
        transactions=[TransactionResponse.model_validate(t) for t in state.transactions],
    )
