"""
Ledger API endpoints.

Read-only views over journal entries and the general ledger.
Journals are only ever written through the purchase and
expense endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pos_ledger.exceptions import LedgerError
from pos_ledger.models.account import Account
from pos_ledger.models.base import get_db
from pos_ledger.models.enums import ReferenceType
from pos_ledger.services.ledger_service import LedgerService
from pos_ledger.schemas.ledger import (
    JournalEntryResponse,
    GeneralLedgerEntryResponse,
    AccountBalanceResponse,
    IntegrityResponse,
)

router = APIRouter(prefix="/ledger", tags=["Ledger"])


@router.get(
    "/journals/{reference_type}/{reference_id}",
    response_model=JournalEntryResponse,
)
def get_journal(
    reference_type: ReferenceType,
    reference_id: int,
    db: Session = Depends(get_db),
):
    """Get the journal entry posted for a document, with its lines."""
    journal = LedgerService(db).get_journal(reference_type, reference_id)
    if not journal:
        raise HTTPException(
            status_code=404,
            detail=f"No journal entry for {reference_type.value} {reference_id}",
        )
    return journal


@router.get("/entries", response_model=list[GeneralLedgerEntryResponse])
def get_ledger_entries(
    reference_type: ReferenceType | None = None,
    reference_id: int | None = None,
    account_id: int | None = None,
    db: Session = Depends(get_db),
):
    """
    General ledger rows, optionally filtered by document or account.

    Purchases come before sales, then newest first.
    """
    return LedgerService(db).get_ledger_entries(
        reference_type=reference_type,
        reference_id=reference_id,
        account_id=account_id,
    )


@router.get(
    "/accounts/{account_id}/balance",
    response_model=AccountBalanceResponse,
)
def get_account_balance(
    account_id: int,
    db: Session = Depends(get_db),
):
    """
    Get the current balance for an account.

    Balance is calculated from the general ledger, not stored.
    """
    service = LedgerService(db)
    try:
        balance = service.get_account_balance(account_id)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    account = db.get(Account, account_id)

    return AccountBalanceResponse(
        account_id=account.id,
        account_code=account.code,
        account_type=account.account_type,
        balance=balance,
    )


@router.get("/integrity", response_model=IntegrityResponse)
def check_integrity(db: Session = Depends(get_db)):
    """Check that the ledger balances and mirrors every journal line."""
    return LedgerService(db).check_integrity()
