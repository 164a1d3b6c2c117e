"""Category endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from pocketledger.api.deps import get_ledger_service
from pocketledger.api.schemas.category import (
    CategoryCreateRequest,
    CategoryUpdateRequest,
    CategoryResponse,
    CategoryListResponse,
)
from pocketledger.services import LedgerService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
def list_categories(ledger: LedgerService = Depends(get_ledger_service)):
    categories = ledger.categories
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in categories],
        count=len(categories),
    )


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(data: CategoryCreateRequest, ledger: LedgerService = Depends(get_ledger_service)):
    category = ledger.create_category(data.name, data.type, icon=data.icon)
    if category is None:
        raise HTTPException(status_code=503, detail="Sync failed")
    return CategoryResponse.model_validate(category)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    data: CategoryUpdateRequest,
    ledger: LedgerService = Depends(get_ledger_service),
):
    category = ledger.update_category(category_id, name=data.name, icon=data.icon)
    if category is None:
        raise HTTPException(status_code=503, detail="Sync failed")
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=204)
def delete_category(category_id: str, ledger: LedgerService = Depends(get_ledger_service)):
    """Delete a category. Transactions keep their category id."""
    if not ledger.delete_category(category_id):
        raise HTTPException(status_code=503, detail="Sync failed")
