"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from pos_ledger.models.base import Base
from pos_ledger.models.enums import AccountType, AccountRole, ReferenceType
from pos_ledger.models.account import Account
from pos_ledger.models.catalog import Vendor, Product
from pos_ledger.models.purchase import Purchase, PurchaseItem
from pos_ledger.models.purchase_return import PurchaseReturn, PurchaseReturnItem
from pos_ledger.models.expense import Expense
from pos_ledger.models.journal_entry import JournalEntry, JournalEntryLine
from pos_ledger.models.general_ledger import GeneralLedgerEntry

__all__ = [
    "Base",
    "AccountType",
    "AccountRole",
    "ReferenceType",
    "Account",
    "Vendor",
    "Product",
    "Purchase",
    "PurchaseItem",
    "PurchaseReturn",
    "PurchaseReturnItem",
    "Expense",
    "JournalEntry",
    "JournalEntryLine",
    "GeneralLedgerEntry",
]
