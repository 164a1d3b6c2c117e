"""Transaction endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from pocketledger.api.deps import get_ledger_service
from pocketledger.api.schemas.transaction import (
    TransactionRequest,
    TransactionResponse,
    TransactionListResponse,
)
from pocketledger.domain.models import TransactionType
from pocketledger.services import LedgerService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    type: Optional[TransactionType] = Query(None, description="income, expense or transfer"),
    account_id: Optional[str] = Query(None, description="Source or destination account"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """List transactions, newest first."""
    transactions = ledger.list_transactions(
        txn_type=type,
        account_id=account_id,
        start_date=start_date,
        end_date=end_date,
    )
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        count=len(transactions),
    )


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(transaction_id: str, ledger: LedgerService = Depends(get_ledger_service)):
    return TransactionResponse.model_validate(ledger.get_transaction(transaction_id))


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(data: TransactionRequest, ledger: LedgerService = Depends(get_ledger_service)):
    """
    Record a transaction and apply it to the account balances.

    Answers 503 when the ledger could not be persisted; nothing changes then.
    """
    tx = ledger.create_transaction(data.to_data())
    if tx is None:
        raise HTTPException(status_code=503, detail="Sync failed")
    return TransactionResponse.model_validate(tx)


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    data: TransactionRequest,
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Replace a transaction; the old effect is reversed before the new one applies."""
    tx = ledger.update_transaction(transaction_id, data.to_data())
    if tx is None:
        raise HTTPException(status_code=503, detail="Sync failed")
    return TransactionResponse.model_validate(tx)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(transaction_id: str, ledger: LedgerService = Depends(get_ledger_service)):
    """Delete a transaction and reverse its effect."""
    if not ledger.delete_transaction(transaction_id):
        raise HTTPException(status_code=503, detail="Sync failed")
