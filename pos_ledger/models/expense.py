"""
Expense model.

An expense is paid in cash; its category decides which
expense account the debit lands on.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import String, Text, Date, DateTime, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from pos_ledger.models.base import Base
from pos_ledger.models.enums import ReferenceType


class Expense(Base):
    __tablename__ = "expenses"

    reference_type = ReferenceType.EXPENSE

    id: Mapped[int] = mapped_column(primary_key=True)
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    expense_date: Mapped[date] = mapped_column(
        Date, nullable=False, default=date.today
    )
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Expense {self.description} {self.amount}>"
