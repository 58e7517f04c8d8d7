"""
Purchase return API endpoints.

Returns are recorded and deleted, never edited: a wrong return is
deleted (putting the goods back into stock) and recorded again.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pos_ledger.exceptions import LedgerError
from pos_ledger.models.base import get_db, unit_of_work
from pos_ledger.services.purchase_return_service import PurchaseReturnService
from pos_ledger.schemas.purchase_return import (
    PurchaseReturnCreate,
    PurchaseReturnResponse,
    PurchaseReturnAccounting,
    PurchaseReturnPostedResponse,
    PurchaseReturnDeletedResponse,
)

router = APIRouter(prefix="/purchase-returns", tags=["Purchase Returns"])


@router.post("", response_model=PurchaseReturnPostedResponse, status_code=201)
def create_purchase_return(
    request: PurchaseReturnCreate,
    db: Session = Depends(get_db),
):
    """
    Record goods sent back to a vendor.

    Stock is decremented and the return's journal posted in the
    same transaction.
    """
    service = PurchaseReturnService(db)
    try:
        with unit_of_work(db):
            purchase_return, posting = service.create_purchase_return(request)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return PurchaseReturnPostedResponse(
        purchase_return=PurchaseReturnResponse.model_validate(purchase_return),
        accounting=PurchaseReturnAccounting(
            journal_entry_id=posting.journal_entry_id,
            total_returned_cost=posting.total_returned_cost,
        ),
    )


@router.get("", response_model=list[PurchaseReturnResponse])
def list_purchase_returns(db: Session = Depends(get_db)):
    return PurchaseReturnService(db).list_purchase_returns()


@router.get("/{return_id}", response_model=PurchaseReturnResponse)
def get_purchase_return(
    return_id: int,
    db: Session = Depends(get_db),
):
    service = PurchaseReturnService(db)
    try:
        return service.get_purchase_return(return_id)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{return_id}", response_model=PurchaseReturnDeletedResponse)
def delete_purchase_return(
    return_id: int,
    db: Session = Depends(get_db),
):
    """Delete a return, reverse its journal and restore the stock."""
    service = PurchaseReturnService(db)
    try:
        with unit_of_work(db):
            snapshot = service.delete_purchase_return(return_id)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return PurchaseReturnDeletedResponse(
        message="Purchase return deleted successfully",
        purchase_return=snapshot,
    )
