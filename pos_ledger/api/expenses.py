"""
Expense API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pos_ledger.exceptions import LedgerError
from pos_ledger.models.base import get_db, unit_of_work
from pos_ledger.services.expense_service import ExpenseService
from pos_ledger.schemas.expense import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    ExpenseAccounting,
    ExpensePostedResponse,
    ExpenseDeletedResponse,
)

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.post("", response_model=ExpensePostedResponse, status_code=201)
def create_expense(
    request: ExpenseCreate,
    db: Session = Depends(get_db),
):
    """Record an expense with its accounting entries."""
    service = ExpenseService(db)
    try:
        with unit_of_work(db):
            expense, journal_id = service.create_expense(request)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return ExpensePostedResponse(
        expense=ExpenseResponse.model_validate(expense),
        accounting=ExpenseAccounting(journal_entry_id=journal_id),
    )


@router.get("", response_model=list[ExpenseResponse])
def list_expenses(db: Session = Depends(get_db)):
    return ExpenseService(db).list_expenses()


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: int,
    db: Session = Depends(get_db),
):
    service = ExpenseService(db)
    try:
        return service.get_expense(expense_id)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{expense_id}", response_model=ExpensePostedResponse)
def update_expense(
    expense_id: int,
    request: ExpenseUpdate,
    db: Session = Depends(get_db),
):
    """Revise an expense; its journal entry is replaced."""
    service = ExpenseService(db)
    try:
        with unit_of_work(db):
            expense, journal_id = service.update_expense(expense_id, request)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return ExpensePostedResponse(
        expense=ExpenseResponse.model_validate(expense),
        accounting=ExpenseAccounting(journal_entry_id=journal_id),
    )


@router.delete("/{expense_id}", response_model=ExpenseDeletedResponse)
def delete_expense(
    expense_id: int,
    db: Session = Depends(get_db),
):
    """Delete an expense and reverse its accounting entries."""
    service = ExpenseService(db)
    try:
        with unit_of_work(db):
            snapshot = service.delete_expense(expense_id)
    except LedgerError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return ExpenseDeletedResponse(
        message="Expense deleted successfully",
        expense=snapshot,
    )
