"""
Journal entry and journal entry line models.

A journal entry is the balanced double-entry record of one
financial document. It is replaced as a whole when the document
changes and removed when the document is deleted; lines are
never edited in place.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    String, Integer, Date, DateTime, Numeric, ForeignKey,
    UniqueConstraint, Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pos_ledger.models.base import Base
from pos_ledger.models.enums import ReferenceType


class JournalEntry(Base):
    """
    Header of a journal entry.

    The (reference_type, reference_id) pair points back to the
    financial document. The unique constraint makes a second
    posting for the same document fail at the database level.
    Ids are never reused, including on SQLite.
    """

    __tablename__ = "journal_entries"
    __table_args__ = (
        UniqueConstraint(
            "reference_type", "reference_id",
            name="uq_journal_entries_reference",
        ),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    entry_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    reference_type: Mapped[ReferenceType] = mapped_column(
        SAEnum(ReferenceType, name="reference_type_enum"),
        nullable=False,
    )
    reference_id: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    lines: Mapped[list["JournalEntryLine"]] = relationship(
        back_populates="journal",
        order_by="JournalEntryLine.id",
    )

    def __repr__(self) -> str:
        return (
            f"<JournalEntry {self.id} "
            f"{self.reference_type.value}:{self.reference_id}>"
        )


class JournalEntryLine(Base):
    """
    One debit or one credit against one account.

    Exactly one of debit_amount / credit_amount is set. The
    LedgerService enforces that and the balance rule before
    anything is written.
    """

    __tablename__ = "journal_entry_lines"

    id: Mapped[int] = mapped_column(primary_key=True)
    journal_id: Mapped[int] = mapped_column(
        ForeignKey("journal_entries.id"), nullable=False, index=True
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

    journal: Mapped["JournalEntry"] = relationship(back_populates="lines")

    def __repr__(self) -> str:
        if self.debit_amount is not None:
            return f"<JournalEntryLine DR {self.account_id} {self.debit_amount}>"
        return f"<JournalEntryLine CR {self.account_id} {self.credit_amount}>"
