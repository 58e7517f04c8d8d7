"""
Pydantic schemas for ledger operations.

The request schemas are the contract between the Journal
Composer and the LedgerService: the composer builds a
JournalPostRequest, the service validates and persists it.
The response schemas shape journal and ledger data for the API.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from pos_ledger.models.enums import AccountType, ReferenceType


# --- Request Schemas ---

class JournalLineCreate(BaseModel):
    """A single debit or credit line; exactly one side is set."""
    account_id: int
    debit_amount: Decimal | None = None
    credit_amount: Decimal | None = None
    description: str = Field(min_length=1, max_length=255)

    @model_validator(mode="after")
    def exactly_one_side(self) -> "JournalLineCreate":
        has_debit = self.debit_amount is not None
        has_credit = self.credit_amount is not None
        if has_debit == has_credit:
            raise ValueError(
                "line must carry exactly one of debit_amount or credit_amount"
            )
        amount = self.debit_amount if has_debit else self.credit_amount
        if amount <= 0:
            raise ValueError("line amount must be positive")
        return self

    @property
    def amount(self) -> Decimal:
        if self.debit_amount is not None:
            return self.debit_amount
        return self.credit_amount


class JournalPostRequest(BaseModel):
    """
    A complete journal entry for one financial document.

    Line count and the balance rule are checked by the
    LedgerService so that a violation surfaces as a ledger
    ValidationError rather than a schema error.
    """
    reference_type: ReferenceType
    reference_id: int
    entry_date: date
    description: str = Field(min_length=1, max_length=255)
    lines: list[JournalLineCreate]

    @property
    def total_debits(self) -> Decimal:
        return sum(
            (line.debit_amount for line in self.lines
             if line.debit_amount is not None),
            Decimal("0"),
        )

    @property
    def total_credits(self) -> Decimal:
        return sum(
            (line.credit_amount for line in self.lines
             if line.credit_amount is not None),
            Decimal("0"),
        )


# --- Response Schemas ---

class JournalLineResponse(BaseModel):
    id: int
    account_id: int
    debit_amount: Decimal | None
    credit_amount: Decimal | None
    description: str

    model_config = {"from_attributes": True}


class JournalEntryResponse(BaseModel):
    id: int
    entry_date: date
    description: str
    reference_type: ReferenceType
    reference_id: int
    created_at: datetime
    lines: list[JournalLineResponse]

    model_config = {"from_attributes": True}


class GeneralLedgerEntryResponse(BaseModel):
    id: int
    transaction_date: date
    account_id: int
    debit_amount: Decimal | None
    credit_amount: Decimal | None
    description: str
    reference_type: ReferenceType
    reference_id: int
    journal_entry_id: int

    model_config = {"from_attributes": True}


class AccountBalanceResponse(BaseModel):
    """Response for an account balance query."""
    account_id: int
    account_code: str
    account_type: AccountType
    balance: Decimal


class IntegrityResponse(BaseModel):
    """Result of a whole-ledger consistency check."""
    total_debits: Decimal
    total_credits: Decimal
    difference: Decimal
    is_balanced: bool
    unbalanced_journal_ids: list[int]
    journal_line_count: int
    ledger_row_count: int
