"""
Pydantic schemas for expense operations.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class ExpenseCreate(BaseModel):
    description: str = Field(min_length=1, max_length=200)
    amount: Decimal = Field(gt=0, decimal_places=2)
    expense_date: date | None = None
    category: str | None = Field(default=None, max_length=100)
    notes: str | None = None


class ExpenseUpdate(ExpenseCreate):
    """An update must restate the date the expense was incurred."""
    expense_date: date


class ExpenseResponse(BaseModel):
    id: int
    description: str
    amount: Decimal
    expense_date: date
    category: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ExpenseAccounting(BaseModel):
    journal_entry_id: int


class ExpensePostedResponse(BaseModel):
    """Response after an expense is created or updated."""
    expense: ExpenseResponse
    accounting: ExpenseAccounting


class ExpenseDeletedResponse(BaseModel):
    message: str
    expense: ExpenseResponse
