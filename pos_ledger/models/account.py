"""
Account model (chart of accounts).

Accounts are static configuration: they are seeded once with
fixed ids and the engine only ever posts against them.
"""

from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from pos_ledger.models.base import Base
from pos_ledger.models.enums import AccountType


class Account(Base):
    """
    A single account in the chart of accounts.

    Ids are assigned explicitly by the seed, never generated,
    because the resolver maps roles to these exact numbers.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    code: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(AccountType, name="account_type_enum"),
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Account {self.id} {self.code} ({self.account_type.value})>"
