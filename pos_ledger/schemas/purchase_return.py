"""
Pydantic schemas for purchase return operations.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class PurchaseReturnItemCreate(BaseModel):
    """
    A product sent back to the vendor.

    No unit cost is taken: returned goods leave inventory at the
    cost they were bought at on the original purchase.
    """
    product_id: int
    quantity: int = Field(gt=0)


class PurchaseReturnCreate(BaseModel):
    return_number: str = Field(min_length=1, max_length=50)
    purchase_id: int
    return_date: date | None = None
    tax_amount: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    total_amount: Decimal = Field(gt=0, decimal_places=2)
    refund_received: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    reason: str | None = None
    items: list[PurchaseReturnItemCreate] = Field(min_length=1)

    @field_validator("return_number")
    @classmethod
    def return_number_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("return_number must not be blank")
        return v


class PurchaseReturnItemResponse(BaseModel):
    id: int
    product_id: int
    quantity: int
    unit_cost: Decimal
    line_total: Decimal

    model_config = {"from_attributes": True}


class PurchaseReturnResponse(BaseModel):
    id: int
    return_number: str
    purchase_id: int
    return_date: date
    tax_amount: Decimal
    total_amount: Decimal
    refund_received: Decimal
    reason: str | None
    created_at: datetime
    updated_at: datetime
    items: list[PurchaseReturnItemResponse]

    model_config = {"from_attributes": True}


class PurchaseReturnAccounting(BaseModel):
    journal_entry_id: int
    total_returned_cost: Decimal


class PurchaseReturnPostedResponse(BaseModel):
    purchase_return: PurchaseReturnResponse
    accounting: PurchaseReturnAccounting


class PurchaseReturnDeletedResponse(BaseModel):
    message: str
    purchase_return: PurchaseReturnResponse
