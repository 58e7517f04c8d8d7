"""
Journal composer: turns a financial document into a balanced
set of journal lines.

Composition is pure: it reads attributes off the document and
returns a JournalPostRequest. It never touches the database,
so composing the same unchanged document twice yields the same
lines.

Accounting:
    Purchase
        DEBIT  Inventory          sum(quantity x unit_cost)
        DEBIT  Tax Asset          tax_amount (only when > 0)
        CREDIT Accounts Payable   total_amount
    Purchase return
        DEBIT  Cash               refund_received (only when > 0)
        DEBIT  Accounts Payable   total_amount - refund_received (when > 0)
        CREDIT Inventory          sum(quantity x unit_cost) of returned goods
        CREDIT Tax Asset          tax_amount (only when > 0)
    Expense
        DEBIT  <category expense> amount
        CREDIT Cash               amount
"""

from decimal import Decimal
from typing import Iterable

from pos_ledger.models.enums import ReferenceType
from pos_ledger.schemas.ledger import JournalLineCreate, JournalPostRequest
from pos_ledger.services.chart_of_accounts import (
    ChartOfAccounts,
    get_chart_of_accounts,
)


def inventory_cost(items: Iterable) -> Decimal:
    """Total cost of the stock a purchase brings in."""
    return sum(
        (Decimal(item.quantity) * Decimal(item.unit_cost) for item in items),
        Decimal("0"),
    )


def _debit(account_id: int, amount: Decimal, description: str) -> JournalLineCreate:
    return JournalLineCreate(
        account_id=account_id, debit_amount=amount, description=description,
    )


def _credit(account_id: int, amount: Decimal, description: str) -> JournalLineCreate:
    return JournalLineCreate(
        account_id=account_id, credit_amount=amount, description=description,
    )


class JournalComposer:

    def __init__(self, chart: ChartOfAccounts | None = None):
        self.chart = chart or get_chart_of_accounts()

    def compose(self, document, inventory_total: Decimal | None = None) -> JournalPostRequest:
        """Build the journal for a purchase, purchase return or expense."""
        if document.reference_type == ReferenceType.PURCHASE:
            return self.compose_purchase(document, inventory_total)
        if document.reference_type == ReferenceType.PURCHASE_RETURN:
            return self.compose_purchase_return(document, inventory_total)
        if document.reference_type == ReferenceType.EXPENSE:
            return self.compose_expense(document)
        raise ValueError(
            f"No journal rule for reference type {document.reference_type}"
        )

    def compose_purchase(
        self, purchase, inventory_total: Decimal | None = None
    ) -> JournalPostRequest:
        """
        Journal for a vendor invoice.

        The inventory debit is recomputed from the items rather
        than taken from the stated subtotal, so the ledger always
        matches the stock that actually moved. inventory_total
        may be passed when the caller already summed the items.
        """
        invoice = purchase.invoice_number
        tax_amount = Decimal(purchase.tax_amount or 0)
        total_amount = Decimal(purchase.total_amount)
        if inventory_total is None:
            inventory_total = inventory_cost(purchase.items)

        accounts = self.chart.resolve(
            ReferenceType.PURCHASE, tax_amount=tax_amount
        )

        lines = []
        if inventory_total > 0:
            lines.append(_debit(
                accounts.debit_account_id,
                inventory_total,
                f"Inventory purchase #{invoice}",
            ))
        if accounts.tax_account_id is not None:
            lines.append(_debit(
                accounts.tax_account_id,
                tax_amount,
                f"Tax paid on purchase #{invoice}",
            ))
        lines.append(_credit(
            accounts.credit_account_id,
            total_amount,
            f"Amount owed to vendor for purchase #{invoice}",
        ))

        return JournalPostRequest(
            reference_type=ReferenceType.PURCHASE,
            reference_id=purchase.id,
            entry_date=purchase.purchase_date,
            description=f"Purchase #{invoice}",
            lines=lines,
        )

    def compose_purchase_return(
        self, purchase_return, returned_cost: Decimal | None = None
    ) -> JournalPostRequest:
        """
        Journal for goods sent back to a vendor.

        Undoes the purchase posting for the returned goods: the
        inventory and tax debits become credits, and the payable
        credit becomes a debit split between the cash refund and
        the reduction of what is still owed.
        """
        number = purchase_return.return_number
        tax_amount = Decimal(purchase_return.tax_amount or 0)
        total_amount = Decimal(purchase_return.total_amount)
        refund = Decimal(purchase_return.refund_received or 0)
        if returned_cost is None:
            returned_cost = inventory_cost(purchase_return.items)

        accounts = self.chart.resolve(
            ReferenceType.PURCHASE_RETURN,
            tax_amount=tax_amount,
            refund_amount=refund,
        )

        lines = []
        if accounts.refund_account_id is not None:
            lines.append(_debit(
                accounts.refund_account_id,
                refund,
                f"Refund received for purchase return #{number}",
            ))
        payable_reduction = total_amount - refund
        if payable_reduction > 0:
            lines.append(_debit(
                accounts.debit_account_id,
                payable_reduction,
                f"Reduction in amount owed for purchase return #{number}",
            ))
        if returned_cost > 0:
            lines.append(_credit(
                accounts.credit_account_id,
                returned_cost,
                f"Inventory decrease for purchase return #{number}",
            ))
        if accounts.tax_account_id is not None:
            lines.append(_credit(
                accounts.tax_account_id,
                tax_amount,
                f"Tax reversed on purchase return #{number}",
            ))

        return JournalPostRequest(
            reference_type=ReferenceType.PURCHASE_RETURN,
            reference_id=purchase_return.id,
            entry_date=purchase_return.return_date,
            description=f"Purchase Return #{number}",
            lines=lines,
        )

    def compose_expense(self, expense) -> JournalPostRequest:
        """Journal for a cash-paid expense; balanced by construction."""
        amount = Decimal(expense.amount)
        accounts = self.chart.resolve(
            ReferenceType.EXPENSE, category=expense.category
        )
        description = f"Expense: {expense.description}"

        return JournalPostRequest(
            reference_type=ReferenceType.EXPENSE,
            reference_id=expense.id,
            entry_date=expense.expense_date,
            description=description,
            lines=[
                _debit(accounts.debit_account_id, amount, description),
                _credit(
                    accounts.credit_account_id,
                    amount,
                    f"Cash paid for expense: {expense.description}",
                ),
            ],
        )
