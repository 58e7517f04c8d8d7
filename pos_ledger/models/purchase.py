"""
Purchase and purchase item models.

A purchase is a vendor invoice. Posting it debits inventory
(and recoverable tax) and credits accounts payable; its items
drive the stock and cost basis updates.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Integer, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos_ledger.models.base import Base
from pos_ledger.models.enums import ReferenceType


class Purchase(Base):
    __tablename__ = "purchases"

    reference_type = ReferenceType.PURCHASE

    id: Mapped[int] = mapped_column(primary_key=True)
    invoice_number: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, index=True
    )
    vendor_id: Mapped[int] = mapped_column(
        ForeignKey("vendors.id"), nullable=False, index=True
    )
    purchase_date: Mapped[date] = mapped_column(
        Date, nullable=False, default=date.today
    )
    # Informational only: the inventory debit is recomputed from items
    subtotal: Mapped[Decimal | None] = mapped_column(
        Numeric(14, 2), nullable=True
    )
    tax_amount: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    vendor: Mapped["Vendor"] = relationship()
    items: Mapped[list["PurchaseItem"]] = relationship(
        back_populates="purchase",
        cascade="all, delete-orphan",
        order_by="PurchaseItem.id",
    )

    def __repr__(self) -> str:
        return f"<Purchase #{self.invoice_number} {self.total_amount}>"


class PurchaseItem(Base):
    __tablename__ = "purchase_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    purchase_id: Mapped[int] = mapped_column(
        ForeignKey("purchases.id"), nullable=False, index=True
    )
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id"), nullable=False, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_cost: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False
    )
    line_total: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False
    )

    purchase: Mapped["Purchase"] = relationship(back_populates="items")

    def __repr__(self) -> str:
        return (
            f"<PurchaseItem product={self.product_id} "
            f"{self.quantity} x {self.unit_cost}>"
        )
