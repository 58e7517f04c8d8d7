"""
Purchase API endpoints.

The handlers are thin: each opens one unit of work, delegates to
PurchaseService, and turns ledger errors into HTTP errors.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pos_ledger.exceptions import LedgerError
from pos_ledger.models.base import get_db, unit_of_work
from pos_ledger.services.purchase_service import PurchaseService
from pos_ledger.schemas.purchase import (
    PurchaseCreate,
    PurchaseUpdate,
    PurchaseResponse,
    PurchaseAccounting,
    PurchasePostedResponse,
    PurchaseDeletedResponse,
)

router = APIRouter(prefix="/purchases", tags=["Purchases"])


@router.post("", response_model=PurchasePostedResponse, status_code=201)
def create_purchase(
    request: PurchaseCreate,
    db: Session = Depends(get_db),
):
    """
    Record a purchase with its accounting entries.

    Stock and cost basis of every item are updated and the
    journal is posted in the same transaction.
    """
    service = PurchaseService(db)
    try:
        with unit_of_work(db):
            purchase, posting = service.create_purchase(request)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return PurchasePostedResponse(
        purchase=PurchaseResponse.model_validate(purchase),
        accounting=PurchaseAccounting(
            journal_entry_id=posting.journal_entry_id,
            total_inventory_cost=posting.total_inventory_cost,
        ),
    )


@router.get("", response_model=list[PurchaseResponse])
def list_purchases(db: Session = Depends(get_db)):
    return PurchaseService(db).list_purchases()


@router.get("/{purchase_id}", response_model=PurchaseResponse)
def get_purchase(
    purchase_id: int,
    db: Session = Depends(get_db),
):
    """Get a purchase with its items."""
    service = PurchaseService(db)
    try:
        return service.get_purchase(purchase_id)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{purchase_id}", response_model=PurchasePostedResponse)
def update_purchase(
    purchase_id: int,
    request: PurchaseUpdate,
    db: Session = Depends(get_db),
):
    """
    Revise a purchase.

    The previous journal entry is removed and a new one posted;
    the returned journal_entry_id is the new one.
    """
    service = PurchaseService(db)
    try:
        with unit_of_work(db):
            purchase, posting = service.update_purchase(purchase_id, request)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return PurchasePostedResponse(
        purchase=PurchaseResponse.model_validate(purchase),
        accounting=PurchaseAccounting(
            journal_entry_id=posting.journal_entry_id,
            total_inventory_cost=posting.total_inventory_cost,
        ),
    )


@router.delete("/{purchase_id}", response_model=PurchaseDeletedResponse)
def delete_purchase(
    purchase_id: int,
    db: Session = Depends(get_db),
):
    """Delete a purchase and its accounting entries."""
    service = PurchaseService(db)
    try:
        with unit_of_work(db):
            snapshot = service.delete_purchase(purchase_id)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return PurchaseDeletedResponse(
        message="Purchase deleted successfully",
        purchase=snapshot,
    )
