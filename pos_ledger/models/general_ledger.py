"""
General ledger model.

A flattened, queryable copy of every journal entry line,
stamped with the transaction date and the document reference.
Rows are written and deleted together with the journal lines
they mirror.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    String, Integer, Date, DateTime, Numeric, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column

from pos_ledger.models.base import Base
from pos_ledger.models.enums import ReferenceType


class GeneralLedgerEntry(Base):
    __tablename__ = "general_ledger"

    id: Mapped[int] = mapped_column(primary_key=True)
    transaction_date: Mapped[date] = mapped_column(
        Date, nullable=False, index=True
    )
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    debit_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(14, 2), nullable=True
    )
    credit_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(14, 2), nullable=True
    )
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    reference_type: Mapped[ReferenceType] = mapped_column(
        SAEnum(ReferenceType, name="reference_type_enum"),
        nullable=False,
    )
    reference_id: Mapped[int] = mapped_column(Integer, nullable=False)
    journal_entry_id: Mapped[int] = mapped_column(
        ForeignKey("journal_entries.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return (
            f"<GeneralLedgerEntry {self.account_id} "
            f"DR={self.debit_amount} CR={self.credit_amount}>"
        )
