"""Business logic services."""

from pos_ledger.services.chart_of_accounts import ChartOfAccounts, get_chart_of_accounts
from pos_ledger.services.journal_composer import JournalComposer
from pos_ledger.services.ledger_service import LedgerService
from pos_ledger.services.inventory_service import InventoryService
from pos_ledger.services.purchase_service import PurchaseService
from pos_ledger.services.purchase_return_service import PurchaseReturnService
from pos_ledger.services.expense_service import ExpenseService

__all__ = [
    "ChartOfAccounts",
    "get_chart_of_accounts",
    "JournalComposer",
    "LedgerService",
    "InventoryService",
    "PurchaseService",
    "PurchaseReturnService",
    "ExpenseService",
]
