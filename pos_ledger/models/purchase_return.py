"""
Purchase return and purchase return item models.

A purchase return sends goods from an earlier purchase back to
the vendor. Posting it takes the goods (and their tax) back out
of the books against a cash refund and a smaller payable.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Integer, Date, DateTime, Numeric, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos_ledger.models.base import Base
from pos_ledger.models.enums import ReferenceType


class PurchaseReturn(Base):
    __tablename__ = "purchase_returns"

    reference_type = ReferenceType.PURCHASE_RETURN

    id: Mapped[int] = mapped_column(primary_key=True)
    return_number: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, index=True
    )
    purchase_id: Mapped[int] = mapped_column(
        ForeignKey("purchases.id"), nullable=False, index=True
    )
    return_date: Mapped[date] = mapped_column(
        Date, nullable=False, default=date.today
    )
    tax_amount: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False
    )
    # Part of total_amount paid back in cash; the rest reduces the payable
    refund_received: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False, default=Decimal("0")
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    purchase: Mapped["Purchase"] = relationship()
    items: Mapped[list["PurchaseReturnItem"]] = relationship(
        back_populates="purchase_return",
        cascade="all, delete-orphan",
        order_by="PurchaseReturnItem.id",
    )

    def __repr__(self) -> str:
        return f"<PurchaseReturn #{self.return_number} {self.total_amount}>"


class PurchaseReturnItem(Base):
    __tablename__ = "purchase_return_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    purchase_return_id: Mapped[int] = mapped_column(
        ForeignKey("purchase_returns.id"), nullable=False, index=True
    )
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id"), nullable=False, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    # Cost the goods were bought at on the original purchase
    unit_cost: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False
    )
    line_total: Mapped[Decimal] = mapped_column(
        Numeric(14, 2), nullable=False
    )

    purchase_return: Mapped["PurchaseReturn"] = relationship(
        back_populates="items"
    )

    def __repr__(self) -> str:
        return (
            f"<PurchaseReturnItem product={self.product_id} "
            f"{self.quantity} x {self.unit_cost}>"
        )
