"""Account endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from pocketledger.api.deps import get_ledger_service
from pocketledger.api.schemas.account import (
    AccountCreateRequest,
    AccountUpdateRequest,
    AccountResponse,
    AccountListResponse,
)
from pocketledger.services import AccountCreate, AccountUpdate, LedgerService

router = APIRouter(prefix="/accounts", tags=["accounts"])

SYNC_FAILED = "Sync failed"


@router.get("", response_model=AccountListResponse)
def list_accounts(ledger: LedgerService = Depends(get_ledger_service)):
    """List all accounts with their current balances."""
    accounts = ledger.accounts
    return AccountListResponse(
        accounts=[AccountResponse.model_validate(a) for a in accounts],
        count=len(accounts),
    )


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(data: AccountCreateRequest, ledger: LedgerService = Depends(get_ledger_service)):
    """Create an account; its balance starts at the opening balance."""
    account = ledger.create_account(AccountCreate(**data.model_dump()))
    if account is None:
        raise HTTPException(status_code=503, detail=SYNC_FAILED)
    return AccountResponse.model_validate(account)


@router.put("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: str,
    data: AccountUpdateRequest,
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Edit an account. Only a changed opening balance moves the balance."""
    account = ledger.update_account(account_id, AccountUpdate(**data.model_dump()))
    if account is None:
        raise HTTPException(status_code=503, detail=SYNC_FAILED)
    return AccountResponse.model_validate(account)


@router.delete("/{account_id}", status_code=204)
def delete_account(account_id: str, ledger: LedgerService = Depends(get_ledger_service)):
    """Delete an account. Its transactions are kept."""
    if not ledger.delete_account(account_id):
        raise HTTPException(status_code=503, detail=SYNC_FAILED)
