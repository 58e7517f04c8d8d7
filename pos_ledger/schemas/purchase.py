"""
Pydantic schemas for purchase operations.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class PurchaseItemCreate(BaseModel):
    """One product line on a vendor invoice."""
    product_id: int
    quantity: int = Field(gt=0)
    unit_cost: Decimal = Field(ge=0, decimal_places=2)


class PurchaseCreate(BaseModel):
    invoice_number: str = Field(min_length=1, max_length=50)
    vendor_id: int
    purchase_date: date | None = None
    subtotal: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    tax_amount: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    total_amount: Decimal = Field(gt=0, decimal_places=2)
    items: list[PurchaseItemCreate] = Field(min_length=1)

    @field_validator("invoice_number")
    @classmethod
    def invoice_number_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("invoice_number must not be blank")
        return v


class PurchaseUpdate(PurchaseCreate):
    """
    Full revision of a purchase.

    Every field is resent; the stored items are replaced by
    the new list.
    """


class PurchaseItemResponse(BaseModel):
    id: int
    product_id: int
    quantity: int
    unit_cost: Decimal
    line_total: Decimal

    model_config = {"from_attributes": True}


class PurchaseResponse(BaseModel):
    id: int
    invoice_number: str
    vendor_id: int
    purchase_date: date
    subtotal: Decimal | None
    tax_amount: Decimal
    total_amount: Decimal
    created_at: datetime
    updated_at: datetime
    items: list[PurchaseItemResponse]

    model_config = {"from_attributes": True}


class PurchaseAccounting(BaseModel):
    journal_entry_id: int
    total_inventory_cost: Decimal


class PurchasePostedResponse(BaseModel):
    """Response after a purchase is created or updated."""
    purchase: PurchaseResponse
    accounting: PurchaseAccounting


class PurchaseDeletedResponse(BaseModel):
    message: str
    purchase: PurchaseResponse
